"""
Time provider abstraction for deterministic testing

Provides both real-time and controllable test-time implementations, plus
conversions between datetimes and the millisecond counts that identifiers
carry.

Fun fact: 2**48 milliseconds after 1970 lands in the year 10889. The
timestamp field will outlive the Gregorian calendar's datetime type, which
gives up at year 9999!
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class TimeProvider(Protocol):
    """Protocol for time providers - allows deterministic testing"""

    def now(self) -> datetime:
        """Return current UTC datetime"""
        ...


class RealTimeProvider:
    """Production time provider using system clock"""

    def now(self) -> datetime:
        """Return current UTC time from system clock"""
        return datetime.now(timezone.utc)


class FixedTimeProvider:
    """
    Controllable time provider for deterministic tests

    Allows tests to freeze time, move it, and advance it in milliseconds so
    that generated identifiers carry known timestamps.
    """

    def __init__(self, initial_time: datetime | None = None) -> None:
        """
        Initialize with optional fixed time

        Args:
            initial_time: Starting time (defaults to Unix epoch)
        """
        self._current_time = initial_time or UNIX_EPOCH

    def now(self) -> datetime:
        """Return current test time"""
        return self._current_time

    def set_time(self, dt: datetime) -> None:
        """Set current time to specific value"""
        self._current_time = dt

    def set_epoch_ms(self, timestamp_ms: int) -> None:
        """Set current time to a millisecond offset from the Unix epoch"""
        self._current_time = UNIX_EPOCH + timestamp_ms * _ONE_MS

    def advance_ms(self, milliseconds: int) -> None:
        """Advance time by specified milliseconds"""
        self._current_time += milliseconds * _ONE_MS


def to_epoch_ms(dt: datetime) -> int:
    """
    Whole milliseconds between the Unix epoch and ``dt``

    Naive datetimes are taken to be UTC. Sub-millisecond precision is
    truncated toward the past, so the result may be negative for times
    before 1970.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - UNIX_EPOCH) // _ONE_MS


def from_epoch_ms(timestamp_ms: int) -> datetime:
    """UTC datetime for a millisecond offset from the Unix epoch"""
    return UNIX_EPOCH + timestamp_ms * _ONE_MS


# Global default time provider
default_time_provider: TimeProvider = RealTimeProvider()
