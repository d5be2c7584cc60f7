r"""Functional entry points of the retry engine."""

from __future__ import annotations

__all__ = ["retry", "retry_safe"]

from typing import TYPE_CHECKING, TypeVar

from aslot.retrying.config import RetryOptions
from aslot.retrying.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aslot.results import RetryResult

T = TypeVar("T")


async def retry(
    fn: Callable[[], Awaitable[T] | T],
    options: RetryOptions | None = None,
) -> T:
    """Call ``fn`` until it succeeds, with exponential backoff between
    attempts.

    Args:
        fn: A zero-argument function, either ``async def`` or plain.
        options: The retry configuration. Defaults to ``RetryOptions()``.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        Exception: The error of the last attempt, unchanged, when the
            attempts are exhausted or ``should_retry`` returns ``False``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot import RetryOptions, retry
        >>> async def always_fails():
        ...     raise TimeoutError("upstream timed out")
        ...
        >>> asyncio.run(
        ...     retry(always_fails, RetryOptions(max_attempts=2, initial_delay=0.01))
        ... )  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        TimeoutError: upstream timed out

        ```
    """
    result = await AsyncRetryExecutor(options or RetryOptions()).execute(fn)
    if not result.success:
        raise result.errors[-1]
    return result.value  # type: ignore[return-value]


async def retry_safe(
    fn: Callable[[], Awaitable[T] | T],
    options: RetryOptions | None = None,
) -> RetryResult[T]:
    """Call ``fn`` like ``retry`` but report the outcome instead of
    raising.

    An exception raised by ``should_retry`` or ``on_retry`` is appended
    to ``errors`` and ends the run as ``RetryState.ABORTED``.

    Args:
        fn: A zero-argument function, either ``async def`` or plain.
        options: The retry configuration. Defaults to ``RetryOptions()``.

    Returns:
        The retry outcome with the full error history.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot import RetryOptions, retry_safe
        >>> async def always_fails():
        ...     raise TimeoutError("upstream timed out")
        ...
        >>> result = asyncio.run(
        ...     retry_safe(always_fails, RetryOptions(max_attempts=2, initial_delay=0.01))
        ... )
        >>> result.success, result.attempts, len(result.errors), result.exhausted
        (False, 2, 2, True)

        ```
    """
    executor = AsyncRetryExecutor(options or RetryOptions(), capture_hook_errors=True)
    return await executor.execute(fn)
