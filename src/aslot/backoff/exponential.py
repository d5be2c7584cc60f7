r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aslot.backoff.base import BaseBackoffStrategy
from aslot.core.config import DEFAULT_BACKOFF_MULTIPLIER, DEFAULT_INITIAL_DELAY
from aslot.exceptions import ConfigurationError


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: initial_delay * (multiplier ** attempt), with
    optional max_delay cap.

    This is the default strategy of the retry engine.

    Args:
        initial_delay: Delay in seconds before the first retry (default: 1.0).
        multiplier: Growth factor between consecutive delays (default: 2.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aslot.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial_delay=0.5)
        >>> backoff.calculate(0)
        0.5
        >>> backoff.calculate(1)
        1.0
        >>> backoff.calculate(2)
        2.0
        >>> backoff = ExponentialBackoff(initial_delay=1.0, multiplier=3.0, max_delay=5.0)
        >>> backoff.calculate(1)
        3.0
        >>> backoff.calculate(10)  # Would be 59049.0, but capped
        5.0

        ```
    """

    def __init__(
        self,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        multiplier: float = DEFAULT_BACKOFF_MULTIPLIER,
        max_delay: float | None = None,
    ) -> None:
        if initial_delay < 0:
            msg = f"initial_delay must be non-negative, got {initial_delay}"
            raise ConfigurationError(msg)
        if multiplier <= 0:
            msg = f"multiplier must be positive, got {multiplier}"
            raise ConfigurationError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ConfigurationError(msg)

        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_delay={self.initial_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The retry number (0-indexed).

        Returns:
            The calculated delay: initial_delay * (multiplier ** attempt),
            capped at max_delay if set.
        """
        if self.max_delay is not None:
            # float ** raises OverflowError for large exponents
            try:
                delay = self.initial_delay * (self.multiplier**attempt)
            except OverflowError:
                return self.max_delay
            return min(delay, self.max_delay)
        return self.initial_delay * (self.multiplier**attempt)
