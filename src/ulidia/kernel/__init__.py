"""
Kernel - collaborators and ambient infrastructure

Clock and random source abstractions, the error hierarchy, structured
logging, metrics and settings. Nothing in here knows the identifier layout.
"""

from ulidia.kernel.entropy import FixedRandomSource, RandomSource, SecureRandomSource
from ulidia.kernel.errors import (
    ClockOutOfRange,
    DecodeError,
    EntropyUnavailable,
    GenerationError,
    InvalidBinary,
    InvalidCharacter,
    InvalidLength,
    TimestampOverflow,
    UlidError,
)
from ulidia.kernel.time import FixedTimeProvider, RealTimeProvider, TimeProvider

__all__ = [
    # Time
    "TimeProvider",
    "RealTimeProvider",
    "FixedTimeProvider",
    # Entropy
    "RandomSource",
    "SecureRandomSource",
    "FixedRandomSource",
    # Errors
    "UlidError",
    "DecodeError",
    "InvalidLength",
    "InvalidCharacter",
    "TimestampOverflow",
    "InvalidBinary",
    "GenerationError",
    "ClockOutOfRange",
    "EntropyUnavailable",
]
