"""Retry decorator for storage writes that can hit transient lock contention.

SQLite raises ``OperationalError`` ("database is locked") when another
connection holds the write lock.  Those writes are retried with exponential
backoff and jitter; any other error, or exhaustion of the attempts,
propagates to the caller unchanged.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


def _before_sleep_log(retry_state: RetryCallState) -> None:
    """Log a warning before each retry attempt.

    Args:
        retry_state: Tenacity retry state with attempt info.
    """
    operation = getattr(retry_state.fn, "_operation", "unknown") if retry_state.fn else "unknown"
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "storage_write_retry",
        operation=operation,
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else 0,
        exception=str(exception),
    )


def resilient_write(
    operation: str,
    attempts: int = 3,
    initial_wait: float = 0.05,
    max_wait: float = 1.0,
) -> Callable[[F], F]:
    """Create a retry decorator for a storage write.

    Returns a tenacity retry decorator configured with:
    - *attempts* attempts maximum (default 3)
    - Exponential backoff with jitter starting at *initial_wait* seconds
    - Retries only on ``sqlite3.OperationalError``
    - Warning log before each retry
    - Original exception re-raised after exhaustion

    Args:
        operation: Human-readable name for the write (used in logs).
        attempts: Maximum number of attempts.
        initial_wait: First backoff interval in seconds.
        max_wait: Upper bound on a single backoff interval in seconds.

    Returns:
        A decorator that wraps the function with retry logic.
    """

    def decorator(func: F) -> F:
        func._operation = operation  # type: ignore[attr-defined]

        wrapped = retry(
            retry=retry_if_exception_type(sqlite3.OperationalError),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential_jitter(initial=initial_wait, max=max_wait, jitter=initial_wait),
            before_sleep=_before_sleep_log,
            reraise=True,
        )(func)
        return wrapped  # type: ignore[return-value]

    return decorator
