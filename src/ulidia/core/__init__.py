"""
Core - identifier model, codec, generator and comparator
"""

from ulidia.core.codec import canonicalize, decode, encode, is_valid
from ulidia.core.comparator import (
    MAX_IDENTIFIER,
    MIN_IDENTIFIER,
    compare,
    extract_datetime,
    extract_timestamp,
)
from ulidia.core.generator import Generator, generate, generate_at
from ulidia.core.models import Identifier

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
]
