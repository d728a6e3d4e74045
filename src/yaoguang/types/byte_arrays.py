"""
Fixed-length byte types.

Curve primitives exchange exactly sized buffers (seeds, points, signatures).
Each type here is a `bytes` subclass whose length is checked on construction,
so a wrongly sized buffer can never travel further than the point it was built.
"""

from __future__ import annotations

from typing import ClassVar

from typing_extensions import Buffer, Self


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the instance must contain.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Buffer = b"") -> Self:
        """
        Create and validate a new Bytes instance.

        Args:
            value: A bytes-like buffer.

        Raises:
            ValueError: If the byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        return f"{type(self).__name__}({self.hex()})"


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes (seeds, scalars, digests)."""

    LENGTH = 32


class Bytes33(BaseBytes):
    """Fixed-size byte array of exactly 33 bytes (compressed secp256k1 points)."""

    LENGTH = 33


class Bytes64(BaseBytes):
    """Fixed-size byte array of exactly 64 bytes (Ed25519 secrets and signatures)."""

    LENGTH = 64


class Bytes65(BaseBytes):
    """Fixed-size byte array of exactly 65 bytes (uncompressed points, compact signatures)."""

    LENGTH = 65
