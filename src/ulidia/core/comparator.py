"""
Comparator - total order over identifiers

Identifiers order as unsigned 128-bit integers: timestamp first, then
randomness. Because the alphabet maps increasing 5-bit values to increasing
ASCII code points and the encoding is fixed-width, this order matches plain
string comparison of canonical encodings. That equivalence lets an index over
the raw 16 bytes answer range queries phrased as string bounds.
"""

from datetime import datetime

from ulidia.core.models import MAX_TIMESTAMP, RANDOMNESS_BYTES, Identifier, check_timestamp

MIN_IDENTIFIER = Identifier(0, bytes(RANDOMNESS_BYTES))
MAX_IDENTIFIER = Identifier(MAX_TIMESTAMP, b"\xff" * RANDOMNESS_BYTES)


def compare(a: Identifier, b: Identifier) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b"""
    left, right = bytes(a), bytes(b)
    return (left > right) - (left < right)


def extract_timestamp(identifier: Identifier) -> int:
    """Milliseconds since the Unix epoch carried by ``identifier``"""
    return identifier.timestamp


def extract_datetime(identifier: Identifier) -> datetime:
    """Creation time of ``identifier`` as a timezone-aware UTC datetime"""
    return identifier.created_at


def lower_bound(timestamp_ms: int) -> Identifier:
    """Smallest identifier carrying ``timestamp_ms``"""
    return Identifier(check_timestamp(timestamp_ms), bytes(RANDOMNESS_BYTES))


def upper_bound(timestamp_ms: int) -> Identifier:
    """Largest identifier carrying ``timestamp_ms``"""
    return Identifier(check_timestamp(timestamp_ms), b"\xff" * RANDOMNESS_BYTES)
