r"""Parameter validation for pools and retry policies.

Every validator raises ``ConfigurationError`` with a message naming the
offending parameter and the value it received.
"""

from __future__ import annotations

__all__ = ["validate_concurrency", "validate_retry_params"]

from typing import Any

from aslot.exceptions import ConfigurationError


def validate_concurrency(concurrency: Any) -> None:
    """Validate the concurrency bound of a pool.

    Args:
        concurrency: Maximum number of tasks allowed to run at the same
            time. Must be an integer >= 1. Booleans are rejected even
            though they are ``int`` subclasses.

    Raises:
        ConfigurationError: If concurrency is not an integer >= 1.

    Example:
        ```pycon
        >>> from aslot.core.validation import validate_concurrency
        >>> validate_concurrency(4)
        >>> validate_concurrency(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        aslot.exceptions.ConfigurationError: concurrency must be an integer >= 1, got 0

        ```
    """
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        msg = f"concurrency must be an integer >= 1, got {concurrency!r}"
        raise ConfigurationError(msg)


def validate_retry_params(
    max_attempts: int,
    initial_delay: float,
    backoff_multiplier: float,
    max_delay: float,
    jitter_factor: float = 0.0,
) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Total number of attempts, including the first one.
            Must be an integer >= 1.
        initial_delay: Delay in seconds before the second attempt.
            Must be > 0.
        backoff_multiplier: Factor applied to the delay after each
            failed attempt. Must be > 0.
        max_delay: Upper bound in seconds for a single delay. Must be > 0.
        jitter_factor: Factor for adding random jitter to delays.
            Must be >= 0.

    Raises:
        ConfigurationError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from aslot.core.validation import validate_retry_params
        >>> validate_retry_params(
        ...     max_attempts=3, initial_delay=1.0, backoff_multiplier=2.0, max_delay=30.0
        ... )
        >>> validate_retry_params(
        ...     max_attempts=0, initial_delay=1.0, backoff_multiplier=2.0, max_delay=30.0
        ... )  # doctest: +SKIP

        ```
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        msg = f"max_attempts must be an integer >= 1, got {max_attempts!r}"
        raise ConfigurationError(msg)
    if not initial_delay > 0:
        msg = f"initial_delay must be > 0, got {initial_delay}"
        raise ConfigurationError(msg)
    if not backoff_multiplier > 0:
        msg = f"backoff_multiplier must be > 0, got {backoff_multiplier}"
        raise ConfigurationError(msg)
    if not max_delay > 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ConfigurationError(msg)
    if not jitter_factor >= 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ConfigurationError(msg)
