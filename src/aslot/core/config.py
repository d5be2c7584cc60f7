r"""Configuration defaults and the pool configuration dataclass.

Retry defaults live here so the retry options and the backoff
strategies agree on them.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "RETRY_STATUS_CODES",
    "PoolOptions",
]

from dataclasses import dataclass

from aslot.core.validation import validate_concurrency

# Total number of attempts, including the first one
DEFAULT_MAX_ATTEMPTS = 3

# Delay in seconds before the second attempt
DEFAULT_INITIAL_DELAY = 1.0

# Delay before attempt n+1 = initial_delay * multiplier ** (n - 1)
# With the defaults: 1s, 2s, 4s, ...
DEFAULT_BACKOFF_MULTIPLIER = 2.0

# Upper bound in seconds for a single backoff delay
DEFAULT_MAX_DELAY = 30.0

# HTTP status codes treated as transient by the httpx retry predicate
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass(frozen=True)
class PoolOptions:
    """Configuration for a ``Pool``.

    Args:
        concurrency: Maximum number of tasks running at the same time.
            Must be an integer >= 1.
        auto_start: Reserved flag. It is stored on the pool but does not
            change admission: tasks always start as soon as a slot is
            free.

    Example:
        ```pycon
        >>> from aslot.core.config import PoolOptions
        >>> options = PoolOptions(concurrency=4)
        >>> options.concurrency
        4
        >>> options.auto_start
        True

        ```
    """

    concurrency: int
    auto_start: bool = True

    def __post_init__(self) -> None:
        validate_concurrency(self.concurrency)
