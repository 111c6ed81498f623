"""
Backoff for SQLite lock contention in the identifier store

The identifier core never retries: clock and entropy failures go straight
back to the caller. Retrying is a host concern, and the SQLite store is the
one host shipped here. Only lock contention is retried; other operational
errors (a missing directory, a corrupt file) fail on the first attempt.
"""

import sqlite3
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ulidia.kernel.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Substrings SQLite uses for SQLITE_BUSY and SQLITE_LOCKED
_CONTENTION_MARKERS = ("locked", "busy")


def is_lock_contention(error: BaseException) -> bool:
    """True for OperationalErrors raised because another writer holds the database"""
    if not isinstance(error, sqlite3.OperationalError):
        return False
    message = str(error).lower()
    return any(marker in message for marker in _CONTENTION_MARKERS)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Identifier store locked, retrying",
        operation=getattr(retry_state.fn, "__name__", None),
        attempt=retry_state.attempt_number,
        error=str(error) if error else None,
    )


def retry_on_sqlite_lock(
    max_attempts: int = 3,
    min_wait_ms: int = 50,
    max_wait_ms: int = 500,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Retry a store operation while the database is locked

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        min_wait_ms: Minimum wait time in milliseconds (default: 50)
        max_wait_ms: Maximum wait time in milliseconds (default: 500)

    Returns:
        Decorator that re-runs the operation on lock contention and
        re-raises the last error once attempts run out
    """
    return retry(
        retry=retry_if_exception(is_lock_contention),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=min_wait_ms / 1000.0,
            max=max_wait_ms / 1000.0,
        ),
        before_sleep=_log_retry,
        reraise=True,
    )
