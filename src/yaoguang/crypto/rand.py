"""
Randomness sources for key generation.

A source is anything with a `read(n) -> bytes` method, such as an open binary
file or an `io.BytesIO`. Generation takes the source as an argument, so the
production path (platform CSPRNG) and deterministic derivation (a fixed
in-memory buffer) run the same code.
"""

from __future__ import annotations

import secrets
from typing import Protocol

from .exceptions import InsufficientEntropyError


class RandomnessSource(Protocol):
    """A byte stream that hands out random bytes on demand."""

    def read(self, size: int, /) -> bytes:
        """Return up to `size` bytes; fewer means the stream is exhausted."""
        ...


class SystemRandom:
    """
    The platform's cryptographically secure generator.

    Stateless and safe to share between threads.
    """

    def read(self, size: int, /) -> bytes:
        """Return exactly `size` fresh random bytes."""
        return secrets.token_bytes(size)


SYSTEM_RANDOM = SystemRandom()
"""Default source used when a caller supplies none."""


def read_exact(source: RandomnessSource, size: int) -> bytes:
    """
    Read exactly `size` bytes from `source`.

    Short reads are retried until the source returns an empty chunk.

    Raises:
        InsufficientEntropyError: If the source is exhausted before `size` bytes.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = source.read(size - len(buf))
        if not chunk:
            raise InsufficientEntropyError(expected=size, actual=len(buf))
        buf += chunk
    return bytes(buf)
