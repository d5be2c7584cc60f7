r"""Delays growing by a fixed step after each failed attempt."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from aslot.backoff.base import BaseBackoffStrategy
from aslot.exceptions import ConfigurationError


class LinearBackoff(BaseBackoffStrategy):
    """Wait ``base_delay`` after the first failure, twice that after the
    second, and so on.

    The n-th wait (0-indexed) is ``base_delay * (n + 1)``, optionally
    bounded by ``max_delay``. Used through ``RetryOptions.backoff_strategy``
    when exponential growth backs off too fast, e.g. for a pool of
    workers polling a slowly recovering dependency.

    Args:
        base_delay: Seconds added to the wait after each failure.
        max_delay: Optional bound in seconds for a single wait.

    Example:
        ```pycon
        >>> from aslot.backoff import LinearBackoff
        >>> backoff = LinearBackoff(base_delay=0.5, max_delay=1.2)
        >>> [backoff.calculate(n) for n in range(4)]
        [0.5, 1.0, 1.2, 1.2]

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ConfigurationError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ConfigurationError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        step = attempt + 1
        if self.max_delay is None:
            return self.base_delay * step
        return min(self.base_delay * step, self.max_delay)
