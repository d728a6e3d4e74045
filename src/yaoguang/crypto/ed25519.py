"""
Ed25519 primitive adapter.

A private key is stored as `seed || public_key` (64 bytes). Only the seed is
secret input to the primitive; the trailing half is what lets callers read
the public key without recomputing it.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from yaoguang.types import Bytes32, Bytes64

from .curve import ED25519_SEED_SIZE
from .rand import RandomnessSource, read_exact


def keypair_from_seed(seed: Bytes32) -> Bytes64:
    """
    Expand a 32-byte seed into the 64-byte private key `seed || public_key`.

    Args:
        seed: 32 bytes of secret seed material.

    Returns:
        64-byte private key.
    """
    public_key = Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()
    return Bytes64(bytes(seed) + public_key)


def generate_keypair(random: RandomnessSource) -> Bytes64:
    """Draw a seed from `random` and expand it into a 64-byte private key."""
    seed = Bytes32(read_exact(random, ED25519_SEED_SIZE))
    return keypair_from_seed(seed)


def sign(private_key: Bytes64, message: bytes) -> Bytes64:
    """
    Sign `message` with the seed half of `private_key`.

    EdDSA is deterministic: the same key and message always give the same signature.
    """
    signer = Ed25519PrivateKey.from_private_bytes(private_key[:ED25519_SEED_SIZE])
    return Bytes64(signer.sign(message))


def verify(public_key: Bytes32, message: bytes, signature: Bytes64) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if the signature is valid, False otherwise.
    """
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
        return True
    except (InvalidSignature, ValueError):
        return False
