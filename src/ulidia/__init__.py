"""
ulidia - 128-bit lexicographically sortable identifiers

A 48-bit millisecond timestamp and 80 random bits, stored as 16 big-endian
bytes and written as 26 Crockford Base32 characters. Identifiers sort the
same way as bytes, as integers and as canonical strings, which makes them
good primary keys for ordered indexes.

Fun fact: at 80 random bits, you would need to mint about a trillion
identifiers inside a single millisecond before a collision became likely!
"""

from ulidia.core import (
    MAX_IDENTIFIER,
    MIN_IDENTIFIER,
    Generator,
    Identifier,
    canonicalize,
    compare,
    decode,
    encode,
    extract_datetime,
    extract_timestamp,
    generate,
    generate_at,
    is_valid,
)
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

__version__ = "0.1.0"
__all__ = [
    "Identifier",
    "Generator",
    "generate",
    "generate_at",
    "encode",
    "decode",
    "is_valid",
    "canonicalize",
    "compare",
    "extract_timestamp",
    "extract_datetime",
    "MIN_IDENTIFIER",
    "MAX_IDENTIFIER",
    "UlidError",
    "DecodeError",
    "InvalidLength",
    "InvalidCharacter",
    "TimestampOverflow",
    "InvalidBinary",
    "GenerationError",
    "ClockOutOfRange",
    "EntropyUnavailable",
    "__version__",
]
