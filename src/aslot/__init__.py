r"""aslot - Bounded-concurrency task execution with retry and backoff.

This package provides a slot-limited pool for running asynchronous
tasks and a general-purpose retry engine for wrapping unreliable
operations such as network calls, external-process invocations or
rate-limited API calls. Both are single-process, in-memory and built on
asyncio.

Key Features:
    - Slot pool with strict FIFO admission and guaranteed slot release
    - Structured task outcomes (TaskSuccess / TaskFailure) with durations
    - Order-preserving batch mapping (map, map_settled, map_strict)
    - Retry with exponential backoff, max delay cap and optional jitter
    - Caller-supplied retry predicates and on_retry hooks
    - Ready-made predicates, including transient httpx failures
    - Opt-in JSON structured logging of lifecycle events

Example:
    ```pycon
    >>> import asyncio
    >>> from aslot import Pool, RetryOptions, retry
    >>> async def fetch(item, index):
    ...     return item.upper()
    ...
    >>> async def main():
    ...     pool = Pool(concurrency=4)
    ...     values = await pool.map_settled(["a", "b"], fetch)
    ...     checked = await retry(lambda: len(values), RetryOptions(max_attempts=2))
    ...     return values, checked
    ...
    >>> asyncio.run(main())
    (['A', 'B'], 2)

    ```
"""

from __future__ import annotations

__all__ = [
    "AslotError",
    "ConfigurationError",
    "Pool",
    "PoolOptions",
    "PoolTaskError",
    "PoolTaskResult",
    "RetryOptions",
    "RetryResult",
    "RetryState",
    "TaskFailure",
    "TaskSuccess",
    "__version__",
    "retry",
    "retry_safe",
    "sleep",
]

from importlib.metadata import PackageNotFoundError, version

from aslot.core.config import PoolOptions
from aslot.exceptions import AslotError, ConfigurationError, PoolTaskError
from aslot.pool import Pool
from aslot.results import PoolTaskResult, RetryResult, RetryState, TaskFailure, TaskSuccess
from aslot.retrying import RetryOptions, retry, retry_safe
from aslot.utils.delay import sleep

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
