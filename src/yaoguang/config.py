"""
Global configuration for the yaoguang identity tooling.

Settings are read from the environment once, at import time.
"""

import os

from yaoguang.crypto.curve import CurveType

_SUPPORTED_ENVS: list[str] = ["prod", "test"]

YAOGUANG_ENV = os.environ.get("YAOGUANG_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if YAOGUANG_ENV not in _SUPPORTED_ENVS:
    raise ValueError(
        f"Invalid YAOGUANG_ENV environment variable: '{YAOGUANG_ENV}'. "
        f"Supported values: {_SUPPORTED_ENVS}"
    )

DEFAULT_CURVE: CurveType = CurveType.from_name(
    os.environ.get("YAOGUANG_DEFAULT_CURVE", CurveType.ED25519.label)
)
"""Curve used by the command line tool when --curve is not given."""

LOG_LEVEL: str = os.environ.get("YAOGUANG_LOG_LEVEL", "INFO").upper()
"""Default logging level for the command line tool."""
