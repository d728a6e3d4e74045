"""Exception hierarchy for key material and signing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .curve import CurveType


class CryptoError(Exception):
    """
    Base exception for all identity key errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class UnsupportedCurveError(CryptoError):
    """
    Raised when a curve identifier is unknown or the operation is not defined for it.

    Attributes:
        curve: The offending curve value (an enum member, raw code or name).
    """

    def __init__(self, curve: object, *, operation: str | None = None) -> None:
        self.curve = curve
        self.operation = operation

        name = getattr(curve, "label", None) or repr(curve)
        if operation:
            msg = f"curve {name} is not supported for {operation}"
        else:
            msg = f"unsupported curve: {name}"

        super().__init__(msg)


class InvalidKeyLengthError(CryptoError):
    """
    Raised when a byte buffer does not have the fixed size its curve requires.

    Attributes:
        kind: What the buffer was meant to be ("public key", "private key", "signature").
        curve: The curve whose size rule was violated.
        expected: The required length in bytes.
        actual: The length that was supplied.
    """

    def __init__(self, kind: str, curve: CurveType, *, expected: int, actual: int) -> None:
        self.kind = kind
        self.curve = curve
        self.expected = expected
        self.actual = actual

        super().__init__(
            f"bytes passed have length {actual} but {curve.label} {kind}s have {expected} bytes"
        )


class InconsistentUnsetKeyError(CryptoError):
    """
    Raised when key bytes are supplied together with the unset curve.

    Attributes:
        actual: Number of bytes supplied.
    """

    def __init__(self, actual: int) -> None:
        self.actual = actual
        super().__init__(
            f"attempting to create an unset public key but passed {actual} non-empty key bytes"
        )


class InvalidKeyError(CryptoError):
    """Raised when correctly sized key bytes do not describe a usable key."""


class InsufficientEntropyError(CryptoError):
    """
    Raised when a randomness source cannot supply the bytes a key draw needs.

    Attributes:
        expected: Number of bytes requested.
        actual: Number of bytes the source returned.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"randomness source returned {actual} of {expected} requested bytes")


class SigningFailedError(CryptoError):
    """
    Raised when the underlying primitive rejects a signing request.

    Attributes:
        curve: The curve of the signing key.
        detail: Description of what went wrong.
    """

    def __init__(self, curve: CurveType, detail: str) -> None:
        self.curve = curve
        self.detail = detail
        super().__init__(f"{curve.label} signing failed: {detail}")


class KeyMismatchError(CryptoError):
    """
    Raised when a regenerated key disagrees with the stored candidate.

    Only public halves are kept on the error so it can be logged safely.

    Attributes:
        expected_public: Public key regenerated from the seed.
        actual_public: Public key half stored in the candidate.
    """

    def __init__(self, *, expected_public: bytes, actual_public: bytes) -> None:
        self.expected_public = expected_public
        self.actual_public = actual_public
        super().__init__(
            "ed25519 key generated from seed prefix has public key "
            f"{expected_public.hex().upper()} but candidate carries "
            f"{actual_public.hex().upper()}"
        )


class InvalidSignatureError(CryptoError):
    """Raised when correctly sized signature bytes are malformed or unrecoverable."""
