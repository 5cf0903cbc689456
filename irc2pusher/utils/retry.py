"""Retry utilities for asynchronous operations using Tenacity."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import aiohttp
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    PUSHER_MAX_ATTEMPTS,
    RETRY_BACKOFF_MULTIPLIER,
    RETRY_MAX_BACKOFF_SECONDS,
)

T = TypeVar("T")


class RetryableException(Exception):
    """Exception raised to indicate an operation should be retried."""

    pass


class RetryExhaustedError(Exception):
    """Exception raised when all retry attempts have been exhausted."""

    def __init__(
        self, message: str, attempts: int, final_exception: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.final_exception = final_exception


async def retry_async(
    operation: Callable[[int], Awaitable[tuple[T | None, bool]]],
    max_attempts: int = PUSHER_MAX_ATTEMPTS,
    *,
    multiplier: float = RETRY_BACKOFF_MULTIPLIER,
    max_wait: float = RETRY_MAX_BACKOFF_SECONDS,
    on_retry: Callable[[int, BaseException | None], None] | None = None,
) -> T:
    """Retry an asynchronous operation with exponential backoff using Tenacity.

    Args:
        operation: Async callable that takes the attempt number and returns
            ``(result, should_retry)``.
        max_attempts: Maximum number of attempts.
        multiplier: Exponential backoff multiplier in seconds.
        max_wait: Upper bound for a single wait.
        on_retry: Called with the failed attempt number and its cause before
            sleeping.

    Returns:
        The result from operation if successful.

    Raises:
        RetryExhaustedError: If all attempts are exhausted.
        Exception: Any non-retryable exception raised by ``operation``.
    """
    attempt_count = 0

    def before_attempt(retry_state: RetryCallState) -> None:
        nonlocal attempt_count
        attempt_count = retry_state.attempt_number

    def before_sleep(retry_state: RetryCallState) -> None:
        if on_retry is None or retry_state.outcome is None:
            return
        exc = retry_state.outcome.exception()
        on_retry(retry_state.attempt_number, exc.__cause__ if exc else None)

    async def wrapped_operation() -> T | None:
        try:
            result, should_retry = await operation(attempt_count)
        except (OSError, TimeoutError, aiohttp.ClientError) as e:
            raise RetryableException("Exception occurred, retrying") from e
        if not should_retry:
            return result
        raise RetryableException("Operation indicated retry is needed")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, max=max_wait),
        retry=retry_if_exception_type(RetryableException),
        before=before_attempt,
        before_sleep=before_sleep,
    )

    try:
        return await retrying(wrapped_operation)
    except RetryError as e:
        last = e.last_attempt.exception()
        raise RetryExhaustedError(
            f"Operation failed after {max_attempts} attempts",
            attempts=max_attempts,
            final_exception=last.__cause__ if last else None,
        ) from e
