"""
Identity key material.

Three immutable value types, each tagged with its curve:

- `PrivateKey`: raw secret bytes (64-byte seed || public key for Ed25519,
  32-byte scalar for secp256k1).
- `PublicKey`: raw public bytes (32 bytes for Ed25519, 65-byte uncompressed
  point for secp256k1). The unset curve has no public key and is represented
  by `None`.
- `Signature`: raw signature bytes (64 bytes for Ed25519, 65-byte compact
  recoverable form for secp256k1).

Keys come from one of three places:

1. Fresh generation from a randomness source (`generate_private_key`).
2. Deterministic derivation from a secret string (`private_key_from_secret`).
3. Parsing stored bytes (`private_key_from_raw_bytes`, `public_key_from_bytes`).

Every operation dispatches on the curve. Mixing curves is always rejected.
"""

from __future__ import annotations

import io
import logging
from typing import Final

from pydantic import Field, model_validator

from yaoguang.types import Bytes32, Bytes64, Bytes65, StrictBaseModel

from . import ed25519, secp256k1
from .curve import ED25519_SEED_SIZE, CurveType
from .exceptions import (
    CryptoError,
    InconsistentUnsetKeyError,
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidSignatureError,
    KeyMismatchError,
    SigningFailedError,
    UnsupportedCurveError,
)
from .hashing import keccak256, sha256
from .rand import SYSTEM_RANDOM, RandomnessSource

logger = logging.getLogger(__name__)

ED25519_PUBLIC_KEY_OFFSET: Final = ED25519_SEED_SIZE
"""Offset of the public key half inside a 64-byte Ed25519 private key."""

SECRET_STRETCH_DOUBLINGS: Final = 4
"""
Number of times the secret digest is concatenated with itself.

Four doublings of a 32-byte digest give 512 bytes, more than either curve's
generator consumes. Changing this changes every derived identity.
"""


def _coerce_curve(curve_type: CurveType | int) -> CurveType:
    if isinstance(curve_type, CurveType):
        return curve_type
    if isinstance(curve_type, int) and not isinstance(curve_type, bool):
        return CurveType.from_code(curve_type)
    raise UnsupportedCurveError(curve_type)


def _check_length(kind: str, curve_type: CurveType, data: bytes, expected: int) -> None:
    if len(data) != expected:
        raise InvalidKeyLengthError(kind, curve_type, expected=expected, actual=len(data))


class PublicKey(StrictBaseModel):
    """A public key tagged with its curve."""

    key: bytes
    """Raw public key bytes."""

    curve_type: CurveType
    """Curve the key belongs to. Never UNSET."""

    @model_validator(mode="after")
    def enforce_length(self) -> PublicKey:
        """Reject buffers whose size does not match the curve."""
        if self.curve_type is CurveType.UNSET:
            raise UnsupportedCurveError(self.curve_type, operation="public keys")
        _check_length("public key", self.curve_type, self.key, self.curve_type.public_key_length)
        return self

    def compressed(self) -> bytes:
        """
        Return the 33-byte compressed form of a secp256k1 public key.

        Raises:
            InvalidKeyError: If the bytes are not an uncompressed point encoding.
            UnsupportedCurveError: For any other curve.
        """
        if self.curve_type is not CurveType.SECP256K1:
            raise UnsupportedCurveError(self.curve_type, operation="point compression")
        try:
            return bytes(secp256k1.compress(Bytes65(self.key)))
        except ValueError as exc:
            raise InvalidKeyError(f"cannot compress public key: {exc}") from exc

    def verify(self, message: bytes, signature: Signature) -> bool:
        """
        Check that `signature` over `message` was made by this key's owner.

        Ed25519 signatures cover the raw message; secp256k1 signatures cover
        its Keccak-256 digest.

        Returns:
            True if valid. False for a bad signature or a curve mismatch.
        """
        if signature.curve_type is not self.curve_type:
            return False
        match self.curve_type:
            case CurveType.ED25519:
                return ed25519.verify(
                    Bytes32(self.key), message, Bytes64(signature.signature)
                )
            case CurveType.SECP256K1:
                return secp256k1.verify_compact(
                    Bytes65(self.key), keccak256(message), signature.signature
                )
        return False

    def __str__(self) -> str:
        return f"PublicKey<{self.curve_type}:{self.key.hex().upper()}>"


class Signature(StrictBaseModel):
    """A signature tagged with the curve of the key that made it."""

    signature: bytes
    """Raw signature bytes."""

    curve_type: CurveType
    """Curve of the signing key."""

    @model_validator(mode="after")
    def enforce_length(self) -> Signature:
        """Reject buffers whose size does not match the curve."""
        _check_length(
            "signature", self.curve_type, self.signature, self.curve_type.signature_length
        )
        return self


class PrivateKey(StrictBaseModel):
    """
    A private key tagged with its curve.

    The raw bytes are hidden from `repr()` and `str()`; only the public key is shown.
    """

    key: bytes = Field(repr=False)
    """Raw private key bytes."""

    curve_type: CurveType
    """Curve the key belongs to. Never UNSET."""

    @model_validator(mode="after")
    def enforce_length(self) -> PrivateKey:
        """Reject buffers whose size does not match the curve."""
        if self.curve_type is CurveType.UNSET:
            raise UnsupportedCurveError(self.curve_type, operation="private keys")
        _check_length("private key", self.curve_type, self.key, self.curve_type.private_key_length)
        return self

    def raw_bytes(self) -> bytes:
        """Return the raw private key bytes, as handed to persistence."""
        return self.key

    def get_public_key(self) -> PublicKey:
        """
        Return the public key for this private key.

        Ed25519 reads the trailing half of the stored bytes. secp256k1
        recomputes the point from the scalar on every call.
        """
        match self.curve_type:
            case CurveType.ED25519:
                public = self.key[ED25519_PUBLIC_KEY_OFFSET:]
            case CurveType.SECP256K1:
                public = bytes(secp256k1.public_key_from_scalar(Bytes32(self.key)))
            case _:
                raise UnsupportedCurveError(self.curve_type)
        return PublicKey(key=public, curve_type=self.curve_type)

    def sign(self, message: bytes) -> Signature:
        """
        Sign `message`.

        Ed25519 signs the raw message deterministically. secp256k1 signs the
        Keccak-256 digest of the message and returns the compact recoverable form.

        Raises:
            SigningFailedError: If the primitive rejects the key or input.
        """
        try:
            match self.curve_type:
                case CurveType.ED25519:
                    raw = bytes(ed25519.sign(Bytes64(self.key), message))
                case CurveType.SECP256K1:
                    raw = bytes(secp256k1.sign_compact(Bytes32(self.key), keccak256(message)))
                case _:
                    raise UnsupportedCurveError(self.curve_type, operation="signing")
        except UnsupportedCurveError:
            raise
        except (CryptoError, ValueError) as exc:
            raise SigningFailedError(self.curve_type, str(exc)) from exc
        return Signature(signature=raw, curve_type=self.curve_type)

    def __repr__(self) -> str:
        return f"PrivateKey<PublicKey:{self.get_public_key().key.hex().upper()}>"

    def __str__(self) -> str:
        return repr(self)


def public_key_from_bytes(data: bytes, curve_type: CurveType | int) -> PublicKey | None:
    """
    Wrap raw public key bytes after checking them against the curve.

    Args:
        data: Raw public key bytes.
        curve_type: Curve the bytes claim to belong to.

    Returns:
        The public key, or None for the unset curve with empty bytes.

    Raises:
        InvalidKeyLengthError: If the length does not match the curve.
        InconsistentUnsetKeyError: If bytes are supplied with the unset curve.
        UnsupportedCurveError: If the curve is unknown.
    """
    curve_type = _coerce_curve(curve_type)
    match curve_type:
        case CurveType.UNSET:
            if len(data) > 0:
                raise InconsistentUnsetKeyError(len(data))
            return None
        case CurveType.ED25519 | CurveType.SECP256K1:
            _check_length("public key", curve_type, data, curve_type.public_key_length)
            return PublicKey(key=bytes(data), curve_type=curve_type)
    raise UnsupportedCurveError(curve_type)


def private_key_from_raw_bytes(data: bytes, curve_type: CurveType | int) -> PrivateKey:
    """
    Build a private key from stored bytes.

    For Ed25519 the public key is the trailing 32 bytes of the buffer; it is
    taken as-is (see `ensure_ed25519_private_key_correct` to verify it). For
    secp256k1 the public point is computed from the scalar, which also proves
    the scalar is usable.

    Raises:
        InvalidKeyLengthError: If the length does not match the curve.
        InvalidKeyError: If a secp256k1 scalar is zero or not below the order.
        UnsupportedCurveError: If the curve is unset or unknown.
    """
    curve_type = _coerce_curve(curve_type)
    match curve_type:
        case CurveType.ED25519:
            _check_length("private key", curve_type, data, curve_type.private_key_length)
        case CurveType.SECP256K1:
            _check_length("private key", curve_type, data, curve_type.private_key_length)
            secp256k1.public_key_from_scalar(Bytes32(data))
        case _:
            raise UnsupportedCurveError(curve_type)
    return PrivateKey(key=bytes(data), curve_type=curve_type)


def generate_private_key(
    random: RandomnessSource | None, curve_type: CurveType | int
) -> PrivateKey:
    """
    Generate a private key from a randomness source.

    Args:
        random: Source of random bytes. None selects the platform CSPRNG.
        curve_type: Curve to generate for.

    Raises:
        InsufficientEntropyError: If `random` cannot supply enough bytes.
        UnsupportedCurveError: If the curve is unset or unknown.
    """
    if random is None:
        random = SYSTEM_RANDOM

    curve_type = _coerce_curve(curve_type)
    match curve_type:
        case CurveType.ED25519:
            raw = bytes(ed25519.generate_keypair(random))
        case CurveType.SECP256K1:
            raw = bytes(secp256k1.scalar_from_randomness(random))
        case _:
            raise UnsupportedCurveError(curve_type, operation="key generation")

    private_key = private_key_from_raw_bytes(raw, curve_type)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Generated %s key, public key %s",
            curve_type,
            private_key.get_public_key().key.hex(),
        )
    return private_key


def _stretch_secret(secret: str) -> bytes:
    """Hash the secret, then double the digest `SECRET_STRETCH_DOUBLINGS` times."""
    buf = bytes(sha256(secret.encode("utf-8")))
    for _ in range(SECRET_STRETCH_DOUBLINGS):
        buf += buf
    return buf


def private_key_from_secret(secret: str, curve_type: CurveType | int) -> PrivateKey:
    """
    Derive a private key deterministically from a secret string.

    The secret is hashed with SHA-256 and the digest is stretched by repeated
    self-concatenation; the result is fed to `generate_private_key` as a fixed
    randomness source.

    .. warning::
       There is no salt and no work factor. A guessable secret gives a
       guessable key. Use this for reproducible test and development
       identities only, never for production keys.

    Raises:
        UnsupportedCurveError: If the curve is unset or unknown.
        RuntimeError: If generation fails on the stretched buffer, which
            indicates a bug rather than bad input.
    """
    curve_type = _coerce_curve(curve_type)
    if curve_type is CurveType.UNSET:
        raise UnsupportedCurveError(curve_type, operation="key derivation")

    try:
        private_key = generate_private_key(io.BytesIO(_stretch_secret(secret)), curve_type)
    except CryptoError as exc:
        raise RuntimeError(f"private_key_from_secret: unexpected error: {exc}") from exc

    logger.debug("Derived %s key from secret", curve_type)
    return private_key


def ensure_ed25519_private_key_correct(candidate: bytes) -> None:
    """
    Check that the trailing half of an Ed25519 private key matches its seed.

    The leading 32 bytes are treated as a seed, the full key is regenerated
    from it and compared with the candidate. Detects truncated, corrupted or
    hand-edited key files.

    Raises:
        InvalidKeyLengthError: If the candidate is not 64 bytes.
        KeyMismatchError: If the regenerated key differs from the candidate.
    """
    curve_type = CurveType.ED25519
    _check_length("private key", curve_type, candidate, curve_type.private_key_length)

    derived = ed25519.generate_keypair(io.BytesIO(bytes(candidate)))
    if derived != candidate:
        logger.warning("Ed25519 private key failed integrity check")
        raise KeyMismatchError(
            expected_public=bytes(derived[ED25519_PUBLIC_KEY_OFFSET:]),
            actual_public=bytes(candidate[ED25519_PUBLIC_KEY_OFFSET:]),
        )


def signature_from_bytes(data: bytes, curve_type: CurveType | int) -> Signature:
    """
    Wrap raw signature bytes after checking them against the curve.

    Raises:
        InvalidKeyLengthError: If the length does not match the curve.
        InvalidSignatureError: If a secp256k1 header byte is out of range.
        UnsupportedCurveError: If the curve is unset or unknown.
    """
    curve_type = _coerce_curve(curve_type)
    match curve_type:
        case CurveType.ED25519:
            _check_length("signature", curve_type, data, curve_type.signature_length)
        case CurveType.SECP256K1:
            _check_length("signature", curve_type, data, curve_type.signature_length)
            header = data[0] - secp256k1.COMPACT_HEADER_BASE
            if not 0 <= header < 2 * secp256k1.COMPACT_HEADER_COMPRESSED_FLAG:
                raise InvalidSignatureError(f"invalid compact signature header byte: {data[0]}")
        case _:
            raise UnsupportedCurveError(curve_type, operation="signatures")
    return Signature(signature=bytes(data), curve_type=curve_type)


def recover_public_key(message: bytes, signature: Signature) -> PublicKey:
    """
    Recover the signer's public key from a secp256k1 compact signature.

    Raises:
        InvalidSignatureError: If the signature does not recover to a key.
        UnsupportedCurveError: For curves without key recovery.
    """
    if signature.curve_type is not CurveType.SECP256K1:
        raise UnsupportedCurveError(signature.curve_type, operation="public key recovery")
    try:
        public = secp256k1.recover_compact(signature.signature, keccak256(message))
    except ValueError as exc:
        raise InvalidSignatureError(f"cannot recover public key: {exc}") from exc
    return PublicKey(key=bytes(public), curve_type=CurveType.SECP256K1)
