"""
Generator - fresh identifiers from a clock and a random source

Both collaborators are injected so tests can pin the timestamp and the
randomness. Generation keeps no state between calls: there is no counter and
no lock, so two identifiers minted in the same millisecond are ordered only
by their random bits. Sequential calls usually come out non-decreasing, but
that is not guaranteed.
"""

from ulidia.core.models import MAX_TIMESTAMP, RANDOMNESS_BYTES, Identifier, check_timestamp
from ulidia.kernel.entropy import RandomSource, default_random_source
from ulidia.kernel.errors import ClockOutOfRange, EntropyUnavailable, TimestampOverflow
from ulidia.kernel.logging import get_logger
from ulidia.kernel.metrics import generation_failures_total, ids_generated_total
from ulidia.kernel.time import TimeProvider, default_time_provider, to_epoch_ms

logger = get_logger(__name__)


class Generator:
    """
    Identifier factory

    Satisfies the ``generate()`` shape of an id factory, returning
    Identifier objects. Safe to share between threads as long as the
    injected collaborators are.
    """

    def __init__(
        self,
        time_provider: TimeProvider | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        """
        Args:
            time_provider: Clock to read (defaults to the system clock)
            random_source: Entropy to draw from (defaults to ``secrets``)
        """
        self.time_provider = time_provider or default_time_provider
        self.random_source = random_source or default_random_source

    def generate(self) -> Identifier:
        """
        New identifier stamped with the current time

        Raises:
            ClockOutOfRange: clock reads before 1970 or past the 48-bit range
            EntropyUnavailable: random source failed or returned a short read
        """
        timestamp_ms = to_epoch_ms(self.time_provider.now())
        if not 0 <= timestamp_ms <= MAX_TIMESTAMP:
            generation_failures_total.labels(reason="clock_out_of_range").inc()
            logger.error("Clock out of range", timestamp_ms=timestamp_ms)
            raise ClockOutOfRange(timestamp_ms)

        identifier = Identifier(timestamp_ms, self._draw())
        ids_generated_total.labels(mode="clock").inc()
        return identifier

    def generate_at(self, timestamp_ms: int) -> Identifier:
        """
        New identifier stamped with a caller-supplied time

        Args:
            timestamp_ms: Milliseconds since the Unix epoch

        Raises:
            TimestampOverflow: timestamp is negative or above 2**48 - 1
            EntropyUnavailable: random source failed or returned a short read
        """
        try:
            check_timestamp(timestamp_ms)
        except TimestampOverflow:
            generation_failures_total.labels(reason="timestamp_overflow").inc()
            raise

        identifier = Identifier(timestamp_ms, self._draw())
        ids_generated_total.labels(mode="explicit").inc()
        return identifier

    def _draw(self) -> bytes:
        try:
            randomness = self.random_source.random_bytes(RANDOMNESS_BYTES)
        except Exception as e:
            generation_failures_total.labels(reason="entropy_unavailable").inc()
            logger.error("Random source failed", error=str(e))
            raise EntropyUnavailable(RANDOMNESS_BYTES, str(e) or type(e).__name__) from e

        if not isinstance(randomness, (bytes, bytearray)) or len(randomness) != RANDOMNESS_BYTES:
            generation_failures_total.labels(reason="entropy_unavailable").inc()
            got = len(randomness) if isinstance(randomness, (bytes, bytearray)) else None
            logger.error("Random source returned a short read", received=got)
            raise EntropyUnavailable(RANDOMNESS_BYTES, f"received {got} bytes")
        return bytes(randomness)


# Global default generator
default_generator = Generator()


def generate() -> Identifier:
    """New identifier from the system clock and ``secrets``"""
    return default_generator.generate()


def generate_at(timestamp_ms: int) -> Identifier:
    """New identifier with a fixed timestamp and fresh randomness"""
    return default_generator.generate_at(timestamp_ms)
