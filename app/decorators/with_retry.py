"""Retry with exponential backoff for transient connection failures."""

from collections.abc import Awaitable, Callable
from logging import getLogger

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

RETRIABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    RedisConnectionError,
    RedisTimeoutError,
    ConnectionError,
    TimeoutError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    logger.warning(
        "%s attempt %d failed (%s); retrying in %.2fs",
        getattr(retry_state.fn, "__qualname__", "call"),
        retry_state.attempt_number,
        outcome.exception() if outcome else None,
        retry_state.next_action.sleep if retry_state.next_action else 0.0,
    )


def with_retry[**P, T](
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable on transient errors.

    The delay doubles from ``base_delay`` up to ``max_delay``. Once the
    attempts are exhausted the last exception is re-raised unchanged.

    Args:
        max_retries: Maximum number of attempts, the first call included.
        base_delay: Initial delay between attempts in seconds.
        max_delay: Upper bound for a single delay in seconds.
        exec_retry: Exception types worth another attempt.

    Returns:
        Decorator applying the retry policy.
    """
    return retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_log_retry,
        reraise=True,
    )
