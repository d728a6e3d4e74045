"""Reusable type definitions for the identity layer."""

from .base import StrictBaseModel
from .byte_arrays import BaseBytes, Bytes32, Bytes33, Bytes64, Bytes65

__all__ = [
    "StrictBaseModel",
    "BaseBytes",
    "Bytes32",
    "Bytes33",
    "Bytes64",
    "Bytes65",
]
