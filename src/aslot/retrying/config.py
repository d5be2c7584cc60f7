r"""Configuration dataclass for retry behavior."""

from __future__ import annotations

__all__ = ["RetryOptions"]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aslot.core.config import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
)
from aslot.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aslot.backoff.base import BaseBackoffStrategy


@dataclass(frozen=True)
class RetryOptions:
    """Configuration for ``retry`` and ``retry_safe``.

    The delay before attempt ``n + 1`` is
    ``min(max_delay, initial_delay * backoff_multiplier ** (n - 1))``.

    Args:
        max_attempts: Total number of attempts, including the first one.
            Must be an integer >= 1.
        initial_delay: Delay in seconds before the second attempt. Must be > 0.
        backoff_multiplier: Growth factor between consecutive delays.
            Must be > 0.
        max_delay: Upper bound in seconds for a single delay. Must be > 0.
        should_retry: Optional predicate ``(error, attempt) -> bool``
            called after a failed attempt (1-indexed) that is not the
            last one. Returning ``False`` stops retrying immediately.
            Defaults to always retrying.
        on_retry: Optional hook ``(error, attempt, delay) -> None``, plain
            or ``async def``, called before each backoff wait.
        jitter_factor: Factor for adding random jitter to delays
            (0 disables jitter). Must be >= 0. Jittered delays are still
            capped by ``max_delay``.
        backoff_strategy: Optional strategy replacing the exponential
            formula. Its delays are still capped by ``max_delay``.

    Raises:
        ConfigurationError: If a parameter is out of range.

    Example:
        ```pycon
        >>> from aslot import RetryOptions
        >>> options = RetryOptions()
        >>> options.max_attempts, options.initial_delay, options.max_delay
        (3, 1.0, 30.0)
        >>> options.merge(max_attempts=5).max_attempts
        5

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    max_delay: float = DEFAULT_MAX_DELAY
    should_retry: Callable[[Exception, int], bool] | None = None
    on_retry: Callable[[Exception, int, float], Awaitable[None] | None] | None = None
    jitter_factor: float = 0.0
    backoff_strategy: BaseBackoffStrategy | None = None

    def __post_init__(self) -> None:
        validate_retry_params(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            backoff_multiplier=self.backoff_multiplier,
            max_delay=self.max_delay,
            jitter_factor=self.jitter_factor,
        )

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create new options with the non-None overrides applied.

        Example:
            ```pycon
            >>> from aslot import RetryOptions
            >>> options = RetryOptions(max_attempts=3)
            >>> options.merge(max_attempts=None, initial_delay=0.5).initial_delay
            0.5

            ```
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
