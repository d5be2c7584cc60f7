r"""Delay primitive and backoff delay calculation.

The retry engine waits out every backoff delay through ``sleep``, which
delegates to ``asyncio.sleep``.
"""

from __future__ import annotations

__all__ = ["calculate_sleep_time", "sleep"]

import asyncio
import logging
import random
from typing import TYPE_CHECKING

from aslot.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from aslot.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


async def sleep(seconds: float) -> None:
    """Suspend the calling task for ``seconds`` without blocking the
    event loop.

    A non-positive duration is not an error: the task yields to the
    event loop once and resumes as soon as it is scheduled again.

    Args:
        seconds: The delay in seconds.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot import sleep
        >>> asyncio.run(sleep(0.01))
        >>> asyncio.run(sleep(-5))

        ```
    """
    await asyncio.sleep(max(seconds, 0))


def calculate_sleep_time(
    attempt: int,
    backoff_strategy: BaseBackoffStrategy | None = None,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> float:
    """Calculate the delay before the next attempt.

    The sleep time is calculated as follows:
    1. Base delay: ``backoff_strategy.calculate(attempt)``
    2. Cap: ``min(delay, max_wait_time)`` if ``max_wait_time`` is set
    3. Jitter: ``delay + random.uniform(0, jitter_factor) * delay`` if
       ``jitter_factor > 0``

    Args:
        attempt: The retry number (0-indexed). attempt=0 is the wait
            before the second attempt.
        backoff_strategy: Backoff strategy instance. Defaults to
            ``ExponentialBackoff()``.
        jitter_factor: Factor for adding random jitter. Set to 0 to
            disable jitter.
        max_wait_time: Optional cap in seconds for the base delay.

    Returns:
        The delay in seconds, including any jitter.

    Example:
        ```pycon
        >>> from aslot.backoff import ExponentialBackoff
        >>> from aslot.utils.delay import calculate_sleep_time
        >>> strategy = ExponentialBackoff(initial_delay=0.01)
        >>> calculate_sleep_time(attempt=0, backoff_strategy=strategy)
        0.01
        >>> calculate_sleep_time(attempt=1, backoff_strategy=strategy)
        0.02
        >>> calculate_sleep_time(attempt=10, backoff_strategy=strategy, max_wait_time=0.1)
        0.1

        ```
    """
    if backoff_strategy is None:
        backoff_strategy = ExponentialBackoff()
    sleep_time = backoff_strategy.calculate(attempt)

    if max_wait_time is not None and sleep_time > max_wait_time:
        logger.debug(f"Capping sleep time from {sleep_time:.3f}s to {max_wait_time:.3f}s")
        sleep_time = max_wait_time

    if jitter_factor > 0:
        jitter = random.uniform(0, jitter_factor) * sleep_time  # noqa: S311
        logger.debug(
            f"Waiting {sleep_time + jitter:.3f}s before retry "
            f"(base={sleep_time:.3f}s, jitter={jitter:.3f}s)"
        )
        return sleep_time + jitter

    logger.debug(f"Waiting {sleep_time:.3f}s before retry")
    return sleep_time
