r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs the retry
state machine around a single operation.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aslot.results import RetryResult, RetryState
from aslot.retrying.decider import RetryDecider
from aslot.retrying.manager import CallbackManager
from aslot.retrying.strategy import RetryStrategy
from aslot.utils.awaitables import call_maybe_async
from aslot.utils.delay import sleep
from aslot.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aslot.retrying.config import RetryOptions

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncRetryExecutor:
    """Runs an operation until it succeeds, is vetoed or runs out of
    attempts.

    The executor walks the state machine
    ``ATTEMPTING -> {SUCCEEDED | WAITING | EXHAUSTED | ABORTED}`` and
    ``WAITING -> ATTEMPTING``, delegating each concern to a component:

    - RetryDecider: picks the state following a failed attempt
    - RetryStrategy: computes the backoff delay
    - CallbackManager: invokes ``on_retry`` before each wait

    Backoff waits go through ``aslot.utils.delay.sleep`` so other tasks
    keep running meanwhile. ``asyncio.CancelledError`` raised during an
    attempt or a wait is not recorded and propagates immediately.

    Args:
        options: The retry configuration.
        capture_hook_errors: If ``True``, an exception raised by
            ``should_retry`` or ``on_retry`` is recorded in the result
            and ends the run as ``ABORTED``. If ``False``, it propagates
            to the caller.

    Attributes:
        options: The retry configuration.
        capture_hook_errors: Whether hook errors end the run as
            ``ABORTED`` instead of propagating.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot import RetryOptions
        >>> from aslot.retrying import AsyncRetryExecutor
        >>> calls = []
        >>> async def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> executor = AsyncRetryExecutor(RetryOptions(initial_delay=0.01))
        >>> result = asyncio.run(executor.execute(flaky))
        >>> result.success, result.value, result.attempts, result.state
        (True, 'ok', 2, <RetryState.SUCCEEDED: 'succeeded'>)

        ```
    """

    def __init__(self, options: RetryOptions, capture_hook_errors: bool = False) -> None:
        self.options = options
        self.capture_hook_errors = capture_hook_errors
        self.strategy: RetryStrategy = RetryStrategy.from_options(options)
        self.decider: RetryDecider = RetryDecider(options.max_attempts, options.should_retry)
        self.callbacks: CallbackManager = CallbackManager(options.on_retry)

    async def execute(self, fn: Callable[[], Awaitable[T] | T]) -> RetryResult[T]:
        """Run ``fn`` under the retry policy.

        Args:
            fn: A zero-argument function, either ``async def`` or plain.

        Returns:
            The retry outcome. It records every error observed; errors
            raised by ``fn`` are never raised from here.

        Raises:
            Exception: An error raised by ``should_retry`` or ``on_retry``
                when ``capture_hook_errors`` is ``False``.
        """
        errors: list[Exception] = []
        attempt = 1
        while True:
            try:
                value: Any = await call_maybe_async(fn)
            except Exception as exc:
                errors.append(exc)
                try:
                    state = self.decider.next_state(exc, attempt)
                except Exception as hook_exc:
                    return self._hook_failed(hook_exc, "should_retry", attempt, errors)
                if state.is_terminal:
                    return self._finish(state, attempt, errors)

                delay = self.strategy.calculate_delay(attempt)
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"Attempt {attempt}/{self.options.max_attempts} failed ({exc!r}), "
                    f"retrying in {delay:.3f}s",
                    event="retry_scheduled",
                    attempt=attempt,
                    max_attempts=self.options.max_attempts,
                    delay=delay,
                    error=repr(exc),
                )
                try:
                    await self.callbacks.on_retry(exc, attempt, delay)
                except Exception as hook_exc:
                    return self._hook_failed(hook_exc, "on_retry", attempt, errors)
                await sleep(delay)
                attempt += 1
            else:
                return self._finish(RetryState.SUCCEEDED, attempt, errors, value)

    def _hook_failed(
        self,
        error: Exception,
        hook: str,
        attempt: int,
        errors: list[Exception],
    ) -> RetryResult[Any]:
        if not self.capture_hook_errors:
            raise error
        logger.warning(f"{hook} raised {error!r} after attempt {attempt}, aborting")
        errors.append(error)
        return self._finish(RetryState.ABORTED, attempt, errors)

    def _finish(
        self,
        state: RetryState,
        attempt: int,
        errors: list[Exception],
        value: Any = None,
    ) -> RetryResult[Any]:
        success = state is RetryState.SUCCEEDED
        log_structured(
            logger,
            logging.DEBUG if success else logging.INFO,
            f"Operation {state.value} after {attempt} attempt(s)",
            event=f"retry_{state.value}",
            attempt=attempt,
            max_attempts=self.options.max_attempts,
        )
        return RetryResult(
            success=success,
            value=value,
            attempts=attempt,
            errors=errors,
            state=state,
        )
