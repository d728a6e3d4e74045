"""
secp256k1 primitive adapter.

Keys are 32-byte big-endian scalars; public keys travel uncompressed
(0x04 || x || y, 65 bytes).

Signatures use the compact recoverable layout:

    header (1) || r (32) || s (32)

where header = 27 + recovery_id. The recovery id (0..3) tells a verifier which
of the candidate curve points R produced `r`, so the signer's public key can be
rebuilt from the signature and digest alone.

ECDSA itself runs through the `cryptography` library. That API does not expose
the nonce point, so the recovery id is found by recovering each candidate
public key and keeping the one that matches the signer. The affine point
arithmetic needed for recovery lives in this module.
"""

from __future__ import annotations

from typing import Final

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from yaoguang.types import Bytes32, Bytes33, Bytes65

from .exceptions import InvalidKeyError
from .rand import RandomnessSource, read_exact

P: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
"""secp256k1 field prime."""

N: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
"""secp256k1 curve order."""

G: Final = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)
"""secp256k1 generator point."""

BIT_SIZE: Final = 256
"""Bit size of the curve order."""

SCALAR_DRAW_SIZE: Final = BIT_SIZE // 8 + 8
"""
Random bytes consumed per scalar draw.

The extra 8 bytes make the bias from reducing modulo n - 1 negligible.
"""

COMPACT_HEADER_BASE: Final = 27
"""Header byte of a compact signature for recovery id 0, uncompressed key."""

COMPACT_HEADER_COMPRESSED_FLAG: Final = 4
"""Added to the header when the signer advertises a compressed key."""

Point = tuple[int, int]


def _point_add(p1: Point | None, p2: Point | None) -> Point | None:
    """Add two curve points; None is the point at infinity."""
    if p1 is None:
        return p2
    if p2 is None:
        return p1

    x1, y1 = p1
    x2, y2 = p2

    if x1 == x2 and y1 != y2:
        return None

    if x1 == x2:
        lam = (3 * x1 * x1 * pow(2 * y1, -1, P)) % P
    else:
        lam = ((y2 - y1) * pow(x2 - x1, -1, P)) % P

    x3 = (lam * lam - x1 - x2) % P
    y3 = (lam * (x1 - x3) - y1) % P
    return (x3, y3)


def _point_mul(k: int, point: Point | None) -> Point | None:
    """Scalar multiplication by double-and-add."""
    result = None
    addend = point
    while k:
        if k & 1:
            result = _point_add(result, addend)
        addend = _point_add(addend, addend)
        k >>= 1
    return result


def _lift_x(x: int, odd: bool) -> Point | None:
    """Return the curve point with abscissa `x` and the requested y parity, if any."""
    y_sq = (pow(x, 3, P) + 7) % P
    y = pow(y_sq, (P + 1) // 4, P)
    if (y * y) % P != y_sq:
        return None
    if bool(y & 1) != odd:
        y = P - y
    return (x, y)


def _encode_uncompressed(point: Point) -> Bytes65:
    x, y = point
    return Bytes65(b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big"))


def _decode_uncompressed(data: bytes) -> Point:
    if len(data) != 65 or data[0] != 0x04:
        raise ValueError(f"Invalid uncompressed public key encoding: length={len(data)}")
    return (int.from_bytes(data[1:33], "big"), int.from_bytes(data[33:65], "big"))


def _load_private_key(scalar: Bytes32) -> ec.EllipticCurvePrivateKey:
    value = int.from_bytes(scalar, "big")
    if not 0 < value < N:
        raise InvalidKeyError("secp256k1 private scalar must lie in [1, n-1]")
    try:
        return ec.derive_private_key(value, ec.SECP256K1())
    except ValueError as exc:
        raise InvalidKeyError(f"secp256k1 private scalar rejected: {exc}") from exc


def scalar_from_randomness(random: RandomnessSource) -> Bytes32:
    """
    Draw a private scalar in [1, n-1].

    Reads `SCALAR_DRAW_SIZE` bytes, reduces them modulo n - 1 and adds one, so
    every draw lands in range and no retry is needed.

    This is the reader-driven `randFieldElement` of Go `crypto/ecdsa.GenerateKey`
    before Go 1.20, as called with btcd `btcec` (v1) `S256()`. Keys drawn from
    the same byte stream, including identities from `private_key_from_secret`,
    match keys made by those toolchains bit for bit. Go 1.20 and later use
    rejection sampling and are not compatible.

    Raises:
        InsufficientEntropyError: If `random` runs dry.
    """
    k = int.from_bytes(read_exact(random, SCALAR_DRAW_SIZE), "big")
    k = k % (N - 1) + 1
    return Bytes32(k.to_bytes(32, "big"))


def public_key_from_scalar(scalar: Bytes32) -> Bytes65:
    """
    Compute the uncompressed public key `scalar * G`.

    Raises:
        InvalidKeyError: If the scalar is zero or not below the curve order.
    """
    public_key = _load_private_key(scalar).public_key()
    return Bytes65(
        public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
    )


def compress(public_key: Bytes65) -> Bytes33:
    """Encode an uncompressed public key as the 33-byte compressed form."""
    x, y = _decode_uncompressed(public_key)
    prefix = 0x02 if y % 2 == 0 else 0x03
    return Bytes33(bytes([prefix]) + x.to_bytes(32, "big"))


def _recover_point(r: int, s: int, z: int, recovery_id: int) -> Point | None:
    # R.x may exceed the order by one multiple when recovery_id >= 2.
    x = r + (recovery_id >> 1) * N
    if x >= P:
        return None
    big_r = _lift_x(x, bool(recovery_id & 1))
    if big_r is None:
        return None

    # Q = r^-1 * (s*R - z*G)
    r_inv = pow(r, -1, N)
    u1 = (-z * r_inv) % N
    u2 = (s * r_inv) % N
    return _point_add(_point_mul(u1, G), _point_mul(u2, big_r))


def _split_compact(signature: bytes) -> tuple[int, int, int]:
    if len(signature) != 65:
        raise ValueError(f"Compact signature must be 65 bytes, got {len(signature)}")

    header = signature[0] - COMPACT_HEADER_BASE
    if not 0 <= header < 2 * COMPACT_HEADER_COMPRESSED_FLAG:
        raise ValueError(f"Invalid compact signature header byte: {signature[0]}")

    r = int.from_bytes(signature[1:33], "big")
    s = int.from_bytes(signature[33:65], "big")
    if not (0 < r < N and 0 < s < N):
        raise ValueError("Compact signature r and s must lie in [1, n-1]")
    return header & 3, r, s


def sign_compact(scalar: Bytes32, digest: Bytes32) -> Bytes65:
    """
    Sign a 32-byte digest and return a compact recoverable signature.

    Nonces follow RFC 6979, so the output is deterministic for a given key and
    digest. `s` is normalised to the lower half of the order.

    Args:
        scalar: 32-byte private scalar.
        digest: 32-byte message digest.

    Returns:
        65-byte signature `header || r || s`.

    Raises:
        InvalidKeyError: If the scalar is out of range.
        ValueError: If no recovery id reproduces the signing key.
    """
    private_key = _load_private_key(scalar)

    der_signature = private_key.sign(
        digest, ec.ECDSA(Prehashed(hashes.SHA256()), deterministic_signing=True)
    )
    r, s = decode_dss_signature(der_signature)
    if s > N // 2:
        s = N - s

    numbers = private_key.public_key().public_numbers()
    signer = (numbers.x, numbers.y)
    z = int.from_bytes(digest, "big")

    for recovery_id in range(4):
        if _recover_point(r, s, z, recovery_id) == signer:
            break
    else:
        raise ValueError("no recovery id reproduces the signing key")

    return Bytes65(
        bytes([COMPACT_HEADER_BASE + recovery_id]) + r.to_bytes(32, "big") + s.to_bytes(32, "big")
    )


def recover_compact(signature: bytes, digest: Bytes32) -> Bytes65:
    """
    Recover the uncompressed public key that produced a compact signature.

    Raises:
        ValueError: If the signature is malformed or names no valid point.
    """
    recovery_id, r, s = _split_compact(signature)
    point = _recover_point(r, s, int.from_bytes(digest, "big"), recovery_id)
    if point is None:
        raise ValueError("Compact signature does not recover to a curve point")
    return _encode_uncompressed(point)


def verify_compact(public_key: Bytes65, digest: Bytes32, signature: bytes) -> bool:
    """
    Verify a compact signature against an uncompressed public key.

    The header byte is checked for shape only; the ECDSA check uses `r || s`.

    Returns:
        True if the signature is valid, False otherwise.
    """
    try:
        _, r, s = _split_compact(signature)
        verifier = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_key)
        verifier.verify(
            encode_dss_signature(r, s), digest, ec.ECDSA(Prehashed(hashes.SHA256()))
        )
        return True
    except (InvalidSignature, ValueError):
        return False
