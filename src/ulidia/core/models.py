"""
Identifier - the 128-bit sortable value

An Identifier wraps exactly 16 bytes: a 48-bit big-endian millisecond
timestamp followed by 80 bits of randomness. Ordering, equality and hashing
all work on those 16 bytes, so comparing two Identifiers is the same as
comparing them as unsigned 128-bit integers.

Fun fact: the 16-byte layout is byte-for-byte what a UUID column stores,
which is why the same value can live in a ``uuid`` column and still sort by
creation time!
"""

import functools
import uuid
from datetime import datetime
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ulidia.kernel.errors import InvalidBinary, TimestampOverflow

TIMESTAMP_BITS = 48
RANDOMNESS_BITS = 80
TIMESTAMP_BYTES = TIMESTAMP_BITS // 8
RANDOMNESS_BYTES = RANDOMNESS_BITS // 8
TOTAL_BYTES = TIMESTAMP_BYTES + RANDOMNESS_BYTES

MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MAX_VALUE = (1 << (TIMESTAMP_BITS + RANDOMNESS_BITS)) - 1


def check_timestamp(timestamp_ms: int) -> int:
    """Return ``timestamp_ms`` if it fits in 48 unsigned bits, else raise TimestampOverflow"""
    if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, int):
        raise TypeError(f"timestamp must be an int, got {type(timestamp_ms).__name__}")
    if not 0 <= timestamp_ms <= MAX_TIMESTAMP:
        raise TimestampOverflow(timestamp=timestamp_ms)
    return timestamp_ms


@functools.total_ordering
class Identifier:
    """
    Immutable 128-bit identifier

    Construct from parts with ``Identifier(timestamp, randomness)``, or use
    ``from_bytes``, ``from_int``, ``from_uuid`` and ``from_str`` for the
    other representations.

    Attributes:
        timestamp: Milliseconds since the Unix epoch (48 bits)
        randomness: 10-byte random payload
    """

    __slots__ = ("_raw",)

    def __init__(self, timestamp: int, randomness: bytes) -> None:
        check_timestamp(timestamp)
        if not isinstance(randomness, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"randomness must be bytes-like, got {type(randomness).__name__}"
            )
        randomness = bytes(randomness)
        if len(randomness) != RANDOMNESS_BYTES:
            raise InvalidBinary(
                f"randomness must be {RANDOMNESS_BYTES} bytes, got {len(randomness)}"
            )
        object.__setattr__(
            self, "_raw", timestamp.to_bytes(TIMESTAMP_BYTES, "big") + randomness
        )

    @classmethod
    def _from_raw(cls, raw: bytes) -> "Identifier":
        # Any 16 bytes are valid: the top 6 bytes cannot exceed 48 bits.
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_raw", raw)
        return instance

    @classmethod
    def from_parts(cls, timestamp: int, randomness: bytes) -> "Identifier":
        return cls(timestamp, randomness)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Identifier":
        """Build from the 16-byte big-endian binary form"""
        raw = bytes(data)
        if len(raw) != TOTAL_BYTES:
            raise InvalidBinary(f"binary identifier must be {TOTAL_BYTES} bytes, got {len(raw)}")
        return cls._from_raw(raw)

    @classmethod
    def from_int(cls, value: int) -> "Identifier":
        """Build from an unsigned 128-bit integer"""
        if not 0 <= value <= MAX_VALUE:
            raise InvalidBinary(f"integer identifier must be in [0, 2**128 - 1], got {value}")
        return cls._from_raw(value.to_bytes(TOTAL_BYTES, "big"))

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> "Identifier":
        """Build from a UUID holding the same 16 bytes"""
        return cls._from_raw(value.bytes)

    @classmethod
    def from_str(cls, text: str) -> "Identifier":
        """Decode canonical (or mixed-case) text"""
        from ulidia.core.codec import decode

        return decode(text)

    @property
    def timestamp(self) -> int:
        return int.from_bytes(self._raw[:TIMESTAMP_BYTES], "big")

    @property
    def randomness(self) -> bytes:
        return self._raw[TIMESTAMP_BYTES:]

    @property
    def created_at(self) -> datetime:
        """Creation time as a UTC datetime (OverflowError past year 9999)"""
        from ulidia.kernel.time import from_epoch_ms

        return from_epoch_ms(self.timestamp)

    def to_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self._raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __int__(self) -> int:
        return int.from_bytes(self._raw, "big")

    def __str__(self) -> str:
        from ulidia.core.codec import encode

        return encode(self)

    def __repr__(self) -> str:
        return f"Identifier('{self}')"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Identifier is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Identifier is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (Identifier.from_bytes, (self._raw,))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._raw == other._raw

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        # bytes compare lexicographically as unsigned octets, which for equal
        # lengths is big-endian numeric order
        return self._raw < other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    # Pydantic integration: usable as a model field type

    @classmethod
    def _coerce(cls, value: Any) -> "Identifier":
        if isinstance(value, Identifier):
            return value
        if isinstance(value, str):
            return cls.from_str(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_bytes(value)
        if isinstance(value, uuid.UUID):
            return cls.from_uuid(value)
        raise ValueError(f"cannot build an Identifier from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.to_string_ser_schema(),
        )
