r"""Fixed delay between retry attempts."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from aslot.backoff.base import BaseBackoffStrategy
from aslot.exceptions import ConfigurationError


class ConstantBackoff(BaseBackoffStrategy):
    """Wait the same time before every retry.

    Plugged into ``RetryOptions.backoff_strategy``, it replaces the
    exponential formula; ``RetryOptions.max_delay`` still caps it.

    Args:
        delay: Seconds to wait after each failed attempt.

    Example:
        ```pycon
        >>> from aslot import RetryOptions
        >>> from aslot.backoff import ConstantBackoff
        >>> from aslot.retrying import RetryStrategy
        >>> strategy = RetryStrategy.from_options(
        ...     RetryOptions(backoff_strategy=ConstantBackoff(delay=0.25))
        ... )
        >>> [strategy.calculate_delay(attempt) for attempt in (1, 2, 3)]
        [0.25, 0.25, 0.25]

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ConfigurationError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
