"""
Test Helper Functions - Builders and landmark values

Fun fact: 2021-01-01T00:00:00Z is 1609459200000 ms after the epoch, and in
Crockford Base32 that is 01ETXKWW00 - a handy landmark for eyeballing tests!
"""

import random

from ulidia.core.models import MAX_TIMESTAMP, Identifier

NEW_YEAR_2021_MS = 1_609_459_200_000
NEW_YEAR_2021_PREFIX = "01ETXKWW00"


def random_identifiers(count: int, seed: int = 0) -> list[Identifier]:
    """
    Builder for reproducible batches of identifiers

    Mixes fully random values with pairs that share a timestamp, so that
    ordering tests exercise the randomness tie-break as well.
    """
    rng = random.Random(seed)
    identifiers = []
    for _ in range(count // 2):
        timestamp = rng.randrange(MAX_TIMESTAMP + 1)
        identifiers.append(Identifier(timestamp, rng.randbytes(10)))
        identifiers.append(Identifier(timestamp, rng.randbytes(10)))
    while len(identifiers) < count:
        identifiers.append(Identifier(rng.randrange(MAX_TIMESTAMP + 1), rng.randbytes(10)))
    return identifiers
