r"""Transition logic of the retry state machine after a failed attempt."""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

from aslot.results import RetryState

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides what follows a failed attempt.

    The decider never looks at the error itself: classifying errors as
    retryable or not is the job of the ``should_retry`` predicate.

    Args:
        max_attempts: Total number of attempts allowed.
        should_retry: Optional predicate ``(error, attempt) -> bool``.

    Example:
        ```pycon
        >>> from aslot.retrying import RetryDecider
        >>> decider = RetryDecider(max_attempts=3)
        >>> decider.next_state(ValueError(), attempt=1)
        <RetryState.WAITING: 'waiting'>
        >>> decider.next_state(ValueError(), attempt=3)
        <RetryState.EXHAUSTED: 'exhausted'>
        >>> RetryDecider(3, should_retry=lambda error, attempt: False).next_state(
        ...     ValueError(), attempt=1
        ... )
        <RetryState.ABORTED: 'aborted'>

        ```
    """

    def __init__(
        self,
        max_attempts: int,
        should_retry: Callable[[Exception, int], bool] | None = None,
    ) -> None:
        self.max_attempts = max_attempts
        self.should_retry = should_retry

    def next_state(self, error: Exception, attempt: int) -> RetryState:
        """Return the state following failed attempt ``attempt``.

        Args:
            error: The error raised by the attempt.
            attempt: The attempt that failed (1-indexed).

        Returns:
            ``EXHAUSTED`` if it was the last attempt, ``ABORTED`` if
            ``should_retry`` returned ``False``, ``WAITING`` otherwise.
            ``should_retry`` is not called for the last attempt.
        """
        if attempt >= self.max_attempts:
            return RetryState.EXHAUSTED
        if self.should_retry is not None and not self.should_retry(error, attempt):
            logger.debug(f"should_retry rejected attempt {attempt} failure: {error!r}")
            return RetryState.ABORTED
        return RetryState.WAITING
