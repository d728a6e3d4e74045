"""
Shared pytest fixtures for all yaoguang tests.

Keys are derived from fixed secrets so failures are reproducible.
"""

from __future__ import annotations

import pytest

from yaoguang.crypto import CurveType, PrivateKey, private_key_from_secret


@pytest.fixture
def ed25519_key() -> PrivateKey:
    """Deterministic Ed25519 private key."""
    return private_key_from_secret("ed25519-fixture", CurveType.ED25519)


@pytest.fixture
def secp256k1_key() -> PrivateKey:
    """Deterministic secp256k1 private key."""
    return private_key_from_secret("secp256k1-fixture", CurveType.SECP256K1)


@pytest.fixture(params=[CurveType.ED25519, CurveType.SECP256K1], ids=lambda c: c.label)
def curve(request: pytest.FixtureRequest) -> CurveType:
    """Each supported curve in turn."""
    return request.param


@pytest.fixture
def private_key(curve: CurveType) -> PrivateKey:
    """Deterministic private key on the parametrized curve."""
    return private_key_from_secret(f"{curve.label}-fixture", curve)
