"""
Custom exceptions for ulidia

Every failure mode of the codec and the generator has its own type, so a
caller can tell a bad length from a bad character from an out-of-range
timestamp without parsing messages.

Fun fact: Douglas Crockford left I, L, O and U out of his Base32 alphabet -
the first three look like digits, and U keeps accidental obscenities out of
generated identifiers!
"""


class UlidError(Exception):
    """Base exception for all ulidia errors"""

    pass


# Codec errors


class DecodeError(UlidError, ValueError):
    """Base class for text that is not a well-formed identifier"""

    pass


class InvalidLength(DecodeError):
    """Raised when encoded text is not exactly 26 characters long"""

    def __init__(self, value: str, expected: int = 26) -> None:
        self.value = value
        self.length = len(value)
        self.expected = expected
        super().__init__(
            f"Invalid identifier length {self.length} for {value!r}: "
            f"expected exactly {expected} characters"
        )


class InvalidCharacter(DecodeError):
    """Raised when encoded text contains a symbol outside the Crockford alphabet"""

    def __init__(self, value: str, character: str, position: int) -> None:
        self.value = value
        self.character = character
        self.position = position
        super().__init__(
            f"Invalid character {character!r} at position {position} in {value!r}"
        )


class TimestampOverflow(UlidError, ValueError):
    """
    Raised when a timestamp does not fit in 48 bits

    Covers caller-supplied millisecond values (negative or above 2**48 - 1)
    and encoded text whose leading symbol is greater than 7.
    """

    def __init__(self, timestamp: int | None = None, value: str | None = None) -> None:
        self.timestamp = timestamp
        self.value = value
        if value is not None:
            message = (
                f"Timestamp overflow in {value!r}: leading symbol {value[0]!r} "
                "exceeds '7', the largest that fits a 48-bit timestamp"
            )
        else:
            message = (
                f"Timestamp {timestamp} is outside the 48-bit range "
                f"[0, {(1 << 48) - 1}]"
            )
        super().__init__(message)


class InvalidBinary(UlidError, ValueError):
    """Raised when a binary, integer or UUID form cannot hold an identifier"""

    pass


# Generation errors


class GenerationError(UlidError):
    """Base class for failures of the clock or random source collaborators"""

    pass


class ClockOutOfRange(GenerationError):
    """Raised when the system clock reports a time outside the 48-bit millisecond range"""

    def __init__(self, timestamp_ms: int) -> None:
        self.timestamp_ms = timestamp_ms
        super().__init__(
            f"Clock reported {timestamp_ms} ms since epoch, "
            f"outside the 48-bit range [0, {(1 << 48) - 1}]"
        )


class EntropyUnavailable(GenerationError):
    """Raised when the random source cannot supply the requested bytes"""

    def __init__(self, requested: int, reason: str) -> None:
        self.requested = requested
        self.reason = reason
        super().__init__(f"Could not draw {requested} random bytes: {reason}")


# Storage errors


class StorageError(UlidError):
    """Base class for identifier store errors"""

    pass


class DuplicateIdentifier(StorageError):
    """Raised when inserting a record whose identifier already exists"""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Identifier {identifier} already exists")
