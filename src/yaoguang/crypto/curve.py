"""
Curve descriptors.

Every key, public key and signature is tagged with the curve family it belongs
to. The family fixes the exact byte length of each kind of material:

| Curve     | Private key | Public key                 | Signature                   |
|-----------|-------------|----------------------------|-----------------------------|
| Unset     | 0           | 0                          | n/a                         |
| Ed25519   | 64          | 32                         | 64                          |
| Secp256k1 | 32          | 65 (0x04 prefix + x + y)   | 65 (header + r + s)         |

The Ed25519 private key is the 32-byte seed followed by the 32-byte public key.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from .exceptions import UnsupportedCurveError

ED25519_SEED_SIZE: Final = 32
"""Ed25519 seed size in bytes; the leading half of a private key."""

ED25519_PUBLIC_KEY_SIZE: Final = 32
"""Ed25519 public key size in bytes."""

ED25519_PRIVATE_KEY_SIZE: Final = ED25519_SEED_SIZE + ED25519_PUBLIC_KEY_SIZE
"""Ed25519 private key size in bytes (seed || public key)."""

ED25519_SIGNATURE_SIZE: Final = 64
"""Ed25519 signature size in bytes."""

SECP256K1_PRIVATE_KEY_SIZE: Final = 32
"""secp256k1 scalar size in bytes."""

SECP256K1_PUBLIC_KEY_SIZE: Final = 65
"""Uncompressed secp256k1 public key: 0x04 + 32-byte x + 32-byte y."""

SECP256K1_COMPRESSED_PUBLIC_KEY_SIZE: Final = 33
"""Compressed secp256k1 public key: 0x02/0x03 + 32-byte x."""

SECP256K1_SIGNATURE_SIZE: Final = 65
"""Compact secp256k1 signature: 1 header byte + 32-byte r + 32-byte s."""


class CurveType(IntEnum):
    """Closed set of curve families an identity key may belong to."""

    UNSET = 0
    """No key. Only valid together with empty key bytes."""

    ED25519 = 1
    """Edwards curve 25519 with deterministic EdDSA signatures."""

    SECP256K1 = 2
    """Koblitz curve secp256k1 with compact recoverable ECDSA signatures."""

    @classmethod
    def from_code(cls, code: int) -> CurveType:
        """
        Parse a numeric curve identifier.

        Raises:
            UnsupportedCurveError: If the code names no known curve.
        """
        try:
            return cls(code)
        except ValueError:
            raise UnsupportedCurveError(code) from None

    @classmethod
    def from_name(cls, name: str) -> CurveType:
        """
        Parse a curve name such as "ed25519" or "secp256k1", ignoring case.

        An empty name means unset. Unknown names are rejected rather than
        treated as unset.

        Raises:
            UnsupportedCurveError: If the name matches no known curve.
        """
        normalized = name.strip().lower()
        if normalized == "":
            return cls.UNSET
        for member in cls:
            if member.label == normalized:
                return member
        raise UnsupportedCurveError(name)

    @property
    def label(self) -> str:
        """Lower-case name used in messages and on the command line."""
        return self.name.lower()

    @property
    def private_key_length(self) -> int:
        """Exact private key length in bytes."""
        match self:
            case CurveType.UNSET:
                return 0
            case CurveType.ED25519:
                return ED25519_PRIVATE_KEY_SIZE
            case CurveType.SECP256K1:
                return SECP256K1_PRIVATE_KEY_SIZE
        raise UnsupportedCurveError(self)

    @property
    def public_key_length(self) -> int:
        """Exact public key length in bytes."""
        match self:
            case CurveType.UNSET:
                return 0
            case CurveType.ED25519:
                return ED25519_PUBLIC_KEY_SIZE
            case CurveType.SECP256K1:
                return SECP256K1_PUBLIC_KEY_SIZE
        raise UnsupportedCurveError(self)

    @property
    def signature_length(self) -> int:
        """
        Exact signature length in bytes.

        Raises:
            UnsupportedCurveError: For UNSET, which cannot sign.
        """
        match self:
            case CurveType.ED25519:
                return ED25519_SIGNATURE_SIZE
            case CurveType.SECP256K1:
                return SECP256K1_SIGNATURE_SIZE
        raise UnsupportedCurveError(self, operation="signatures")

    def __str__(self) -> str:
        return self.label
