"""
Codec - canonical 26-character Crockford Base32 text form

The first 10 symbols carry the timestamp as a 50-bit slot (two leading zero
bits plus 48 timestamp bits), the last 16 symbols carry the 80 randomness
bits. Both fields are sliced as whole integers, five bits at a time, most
significant group first, so groups freely straddle byte boundaries.
"""

from ulidia.core.models import MAX_TIMESTAMP, RANDOMNESS_BYTES, TIMESTAMP_BYTES, Identifier
from ulidia.kernel.errors import InvalidCharacter, InvalidLength, TimestampOverflow
from ulidia.kernel.metrics import decode_failures_total

ENCODING = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ENCODED_LENGTH = 26
TIMESTAMP_LENGTH = 10
RANDOMNESS_LENGTH = 16

# A 50-bit slot holds a 48-bit value only if the top symbol is 000xx.
MAX_LEADING_SYMBOL = 7

# Upper and lower case ASCII only; str.upper() would fold some non-ASCII
# characters (e.g. U+017F) onto alphabet letters.
_DECODING: dict[str, int] = {}
for _value, _symbol in enumerate(ENCODING):
    _DECODING[_symbol] = _value
    _DECODING[_symbol.lower()] = _value
del _value, _symbol


def _encode_base32(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        chars.append(ENCODING[value & 31])
        value >>= 5
    return "".join(reversed(chars))


def _decode_base32(symbols: list[int]) -> int:
    value = 0
    for symbol in symbols:
        value = (value << 5) | symbol
    return value


def encode(identifier: Identifier) -> str:
    """
    Encode an identifier as its canonical 26-character uppercase string

    Total over valid identifiers; the leading symbol is always 0-7.
    """
    timestamp_part = _encode_base32(identifier.timestamp, TIMESTAMP_LENGTH)
    randomness = int.from_bytes(identifier.randomness, "big")
    return timestamp_part + _encode_base32(randomness, RANDOMNESS_LENGTH)


def _scan(text: str) -> list[int]:
    """Run the length, alphabet and timestamp-range checks, returning symbol values"""
    if len(text) != ENCODED_LENGTH:
        raise InvalidLength(text, ENCODED_LENGTH)

    symbols = []
    for position, character in enumerate(text):
        symbol = _DECODING.get(character)
        if symbol is None:
            raise InvalidCharacter(text, character, position)
        symbols.append(symbol)

    if symbols[0] > MAX_LEADING_SYMBOL:
        raise TimestampOverflow(value=text)
    return symbols


def decode(text: str) -> Identifier:
    """
    Decode a 26-character string into an identifier

    Case-insensitive. The checks run in order, and the first violated rule
    is reported.

    Raises:
        InvalidLength: text is not exactly 26 characters
        InvalidCharacter: a character is outside the Crockford alphabet
        TimestampOverflow: the leading symbol is greater than 7
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    try:
        symbols = _scan(text)
    except InvalidLength:
        decode_failures_total.labels(reason="invalid_length").inc()
        raise
    except InvalidCharacter:
        decode_failures_total.labels(reason="invalid_character").inc()
        raise
    except TimestampOverflow:
        decode_failures_total.labels(reason="timestamp_overflow").inc()
        raise

    timestamp = _decode_base32(symbols[:TIMESTAMP_LENGTH]) & MAX_TIMESTAMP
    randomness = _decode_base32(symbols[TIMESTAMP_LENGTH:])
    return Identifier._from_raw(
        timestamp.to_bytes(TIMESTAMP_BYTES, "big") + randomness.to_bytes(RANDOMNESS_BYTES, "big")
    )


def is_valid(text: object) -> bool:
    """
    True iff ``text`` would decode successfully

    Runs the same three checks as ``decode`` without building an
    identifier. Non-string input is simply invalid.
    """
    if not isinstance(text, str) or len(text) != ENCODED_LENGTH:
        return False
    symbols = [_DECODING.get(character) for character in text]
    if None in symbols:
        return False
    return symbols[0] <= MAX_LEADING_SYMBOL


def canonicalize(text: str) -> str:
    """Normalize valid text to its uppercase canonical form"""
    return encode(decode(text))
