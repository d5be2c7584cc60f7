r"""Structured outcomes of pool tasks and retried operations.

A pool task ends as either ``TaskSuccess`` (carrying the value) or
``TaskFailure`` (carrying the exception), so exactly one of value and
error is present by construction. Both expose the same ``success``,
``value``, ``error`` and ``duration`` attributes so callers can handle
them uniformly.
"""

from __future__ import annotations

__all__ = ["PoolTaskResult", "RetryResult", "RetryState", "TaskFailure", "TaskSuccess"]

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class TaskSuccess(Generic[T]):
    """A pool task that returned normally.

    Attributes:
        value: The value returned by the task.
        duration: Seconds spent running the task, excluding the wait
            for a slot.

    Example:
        ```pycon
        >>> from aslot.results import TaskSuccess
        >>> result = TaskSuccess(value=42, duration=0.01)
        >>> result.success, result.value, result.error
        (True, 42, None)

        ```
    """

    value: T
    duration: float

    @property
    def success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        """Return the task value."""
        return self.value


@dataclass(frozen=True)
class TaskFailure:
    """A pool task that raised an exception.

    The pool never raises task errors; they are captured here.

    Attributes:
        error: The exception raised by the task.
        duration: Seconds spent running the task, excluding the wait
            for a slot.

    Example:
        ```pycon
        >>> from aslot.results import TaskFailure
        >>> result = TaskFailure(error=ValueError("boom"), duration=0.01)
        >>> result.success, result.value
        (False, None)
        >>> result.error
        ValueError('boom')

        ```
    """

    error: Exception
    duration: float

    @property
    def success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> NoReturn:
        """Re-raise the captured error."""
        raise self.error


PoolTaskResult = Union[TaskSuccess[T], TaskFailure]


class RetryState(Enum):
    """States of the retry state machine.

    ``ATTEMPTING`` and ``WAITING`` are transient; the other three are
    terminal.
    """

    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in {RetryState.SUCCEEDED, RetryState.EXHAUSTED, RetryState.ABORTED}


@dataclass(frozen=True)
class RetryResult(Generic[T]):
    """Outcome of ``retry_safe``.

    Attributes:
        success: Whether an attempt eventually succeeded.
        value: The value of the successful attempt, ``None`` otherwise.
        attempts: Number of attempts made (>= 1).
        errors: Every error observed, in order. Its length is
            ``attempts`` on failure and ``attempts - 1`` on success.
        state: Terminal state of the retry state machine
            (``SUCCEEDED``, ``EXHAUSTED`` or ``ABORTED``).
    """

    success: bool
    value: T | None
    attempts: int
    errors: list[Exception] = field(default_factory=list)
    state: RetryState | None = None

    @property
    def last_error(self) -> Exception | None:
        """The most recent error, or ``None`` if no attempt failed."""
        return self.errors[-1] if self.errors else None

    @property
    def exhausted(self) -> bool:
        """Whether the attempt budget was consumed without success."""
        return self.state is RetryState.EXHAUSTED

    @property
    def aborted(self) -> bool:
        """Whether ``should_retry`` vetoed further attempts."""
        return self.state is RetryState.ABORTED
