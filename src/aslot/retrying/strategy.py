r"""Delay calculation between retry attempts."""

from __future__ import annotations

__all__ = ["RetryStrategy"]

from typing import TYPE_CHECKING

from aslot.backoff.exponential import ExponentialBackoff
from aslot.utils.delay import calculate_sleep_time

if TYPE_CHECKING:
    from aslot.backoff.base import BaseBackoffStrategy
    from aslot.retrying.config import RetryOptions


class RetryStrategy:
    """Calculates the backoff delay after a failed attempt.

    Args:
        backoff_strategy: The strategy producing the base delays.
        max_delay: Cap in seconds for a single delay.
        jitter_factor: Factor for adding random jitter to delays.

    Example:
        ```pycon
        >>> from aslot import RetryOptions
        >>> from aslot.retrying import RetryStrategy
        >>> strategy = RetryStrategy.from_options(
        ...     RetryOptions(initial_delay=0.01, backoff_multiplier=2, max_delay=0.1)
        ... )
        >>> strategy.calculate_delay(1), strategy.calculate_delay(2), strategy.calculate_delay(10)
        (0.01, 0.02, 0.1)

        ```
    """

    def __init__(
        self,
        backoff_strategy: BaseBackoffStrategy,
        max_delay: float | None = None,
        jitter_factor: float = 0.0,
    ) -> None:
        self.backoff_strategy = backoff_strategy
        self.max_delay = max_delay
        self.jitter_factor = jitter_factor

    @classmethod
    def from_options(cls, options: RetryOptions) -> RetryStrategy:
        backoff_strategy = options.backoff_strategy
        if backoff_strategy is None:
            backoff_strategy = ExponentialBackoff(
                initial_delay=options.initial_delay,
                multiplier=options.backoff_multiplier,
                max_delay=options.max_delay,
            )
        return cls(
            backoff_strategy=backoff_strategy,
            max_delay=options.max_delay,
            jitter_factor=options.jitter_factor,
        )

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay after failed attempt ``attempt``.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            Sleep time in seconds, never above ``max_delay`` even with
            jitter.
        """
        delay = calculate_sleep_time(
            attempt=attempt - 1,
            backoff_strategy=self.backoff_strategy,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_delay,
        )
        if self.max_delay is not None:
            return min(delay, self.max_delay)
        return delay
