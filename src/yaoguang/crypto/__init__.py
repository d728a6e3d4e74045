"""
Identity keys for ledger nodes.

Generation, deterministic derivation, parsing, signing and verification of
keypairs on two curve families (Ed25519 and secp256k1) behind one set of
curve-tagged value types.
"""

from .curve import CurveType
from .exceptions import (
    CryptoError,
    InconsistentUnsetKeyError,
    InsufficientEntropyError,
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidSignatureError,
    KeyMismatchError,
    SigningFailedError,
    UnsupportedCurveError,
)
from .keys import (
    PrivateKey,
    PublicKey,
    Signature,
    ensure_ed25519_private_key_correct,
    generate_private_key,
    private_key_from_raw_bytes,
    private_key_from_secret,
    public_key_from_bytes,
    recover_public_key,
    signature_from_bytes,
)
from .rand import SYSTEM_RANDOM, RandomnessSource

__all__ = [
    # Curves
    "CurveType",
    # Key material
    "PrivateKey",
    "PublicKey",
    "Signature",
    # Operations
    "generate_private_key",
    "private_key_from_raw_bytes",
    "private_key_from_secret",
    "public_key_from_bytes",
    "signature_from_bytes",
    "recover_public_key",
    "ensure_ed25519_private_key_correct",
    # Randomness
    "RandomnessSource",
    "SYSTEM_RANDOM",
    # Exceptions
    "CryptoError",
    "UnsupportedCurveError",
    "InvalidKeyLengthError",
    "InconsistentUnsetKeyError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "InsufficientEntropyError",
    "SigningFailedError",
    "KeyMismatchError",
]
