"""
Random source abstraction for identifier generation

Mirrors the time provider: a Protocol, a production implementation backed by
the operating system CSPRNG, and a fixed implementation for tests.
"""

import secrets
from typing import Protocol


class RandomSource(Protocol):
    """Protocol for sources of random bytes"""

    def random_bytes(self, n: int) -> bytes:
        """Return exactly ``n`` random bytes"""
        ...


class SecureRandomSource:
    """Production random source using the ``secrets`` module"""

    def random_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class FixedRandomSource:
    """
    Deterministic random source for tests

    Returns the same payload on every draw. The payload is handed back
    unchanged even when its length differs from the request, so callers can
    exercise short-read handling.
    """

    def __init__(self, payload: bytes = bytes(10)) -> None:
        self.payload = payload
        self.draws = 0

    def random_bytes(self, n: int) -> bytes:
        self.draws += 1
        return self.payload


# Global default random source
default_random_source: RandomSource = SecureRandomSource()
