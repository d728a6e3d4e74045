"""
Hash functions used by the identity layer.

- SHA-256 digests a secret before it is stretched for deterministic derivation.
- Keccak-256 (the pre-standard SHA-3 variant used across Ethereum tooling) is
  applied to messages before secp256k1 signing.
"""

from __future__ import annotations

import hashlib

from Crypto.Hash import keccak

from yaoguang.types import Bytes32


def sha256(data: bytes) -> Bytes32:
    """Return the SHA-256 digest of `data`."""
    return Bytes32(hashlib.sha256(data).digest())


def keccak256(data: bytes) -> Bytes32:
    """Return the Keccak-256 digest of `data`."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return Bytes32(k.digest())
