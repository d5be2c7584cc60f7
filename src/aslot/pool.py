r"""Slot-limited pool for running asynchronous tasks.

A ``Pool`` bounds how many tasks run at the same time. Tasks beyond the
bound wait in a FIFO queue and are admitted in arrival order as slots
free up. Task errors never escape the pool: each task ends as a
``TaskSuccess`` or a ``TaskFailure``.

Example:
    ```pycon
    >>> import asyncio
    >>> from aslot import Pool
    >>> async def double(x, index):
    ...     await asyncio.sleep(0.01)
    ...     return x * 2
    ...
    >>> async def main():
    ...     pool = Pool(concurrency=2)
    ...     results = await pool.map([1, 2, 3, 4], double)
    ...     return [result.value for result in results]
    ...
    >>> asyncio.run(main())
    [2, 4, 6, 8]

    ```
"""

from __future__ import annotations

__all__ = ["Pool"]

import asyncio
import logging
import time
from collections import deque
from typing import TYPE_CHECKING, Any, TypeVar

from aslot.core.validation import validate_concurrency
from aslot.exceptions import PoolTaskError
from aslot.results import PoolTaskResult, TaskFailure, TaskSuccess
from aslot.utils.awaitables import call_maybe_async
from aslot.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from aslot.core.config import PoolOptions

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")
ItemT = TypeVar("ItemT")
R = TypeVar("R")


class Pool:
    """Counting admission gate for asynchronous tasks.

    At most ``concurrency`` tasks hold a slot at any time. A task that
    cannot get a slot waits at the tail of a FIFO queue. When a running
    task finishes, its slot is handed directly to the task at the head
    of the queue, so a newcomer can never overtake a task that has been
    waiting longer.

    The pool has no background task: it only reacts to ``exec`` and
    ``map`` calls. It is bound to the event loop that runs it and must
    not be shared across threads.

    Args:
        concurrency: Maximum number of tasks running at the same time.
            Must be an integer >= 1.
        auto_start: Reserved flag, stored as ``auto_start``. Admission is
            always immediate when a slot is free, whatever its value.

    Raises:
        ConfigurationError: If concurrency is not an integer >= 1.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot import Pool
        >>> async def main():
        ...     pool = Pool(concurrency=1)
        ...     result = await pool.exec(lambda: "done")
        ...     return result.success, result.value, pool.running, pool.waiting
        ...
        >>> asyncio.run(main())
        (True, 'done', 0, 0)

        ```
    """

    def __init__(self, concurrency: int, auto_start: bool = True) -> None:
        validate_concurrency(concurrency)
        self._concurrency = concurrency
        self._auto_start = auto_start
        self._running = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    @classmethod
    def from_options(cls, options: PoolOptions) -> Pool:
        """Create a pool from a ``PoolOptions`` configuration.

        Example:
            ```pycon
            >>> from aslot import Pool
            >>> from aslot.core import PoolOptions
            >>> Pool.from_options(PoolOptions(concurrency=3))
            Pool(concurrency=3, running=0, waiting=0)

            ```
        """
        return cls(concurrency=options.concurrency, auto_start=options.auto_start)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(concurrency={self._concurrency}, "
            f"running={self._running}, waiting={len(self._waiters)})"
        )

    @property
    def concurrency(self) -> int:
        """The maximum number of tasks running at the same time."""
        return self._concurrency

    @property
    def auto_start(self) -> bool:
        return self._auto_start

    @property
    def running(self) -> int:
        """The number of tasks currently holding a slot."""
        return self._running

    @property
    def waiting(self) -> int:
        """The number of tasks queued for a slot."""
        return len(self._waiters)

    async def exec(self, task: Callable[[], Awaitable[T] | T]) -> PoolTaskResult[T]:
        """Run ``task`` once a slot is available.

        The slot is released whether the task returns, raises or is
        cancelled. ``duration`` covers the task only, not the wait for
        the slot.

        Args:
            task: A zero-argument function, either ``async def`` or plain.

        Returns:
            ``TaskSuccess`` with the returned value, or ``TaskFailure``
            with the raised exception. ``asyncio.CancelledError`` is not
            captured: it propagates after the slot is released.
        """
        await self._acquire()
        start_time = time.perf_counter()
        try:
            value = await call_maybe_async(task)
        except Exception as exc:
            duration = time.perf_counter() - start_time
            logger.debug(f"Task failed after {duration:.3f}s: {exc!r}")
            return TaskFailure(error=exc, duration=duration)
        else:
            return TaskSuccess(value=value, duration=time.perf_counter() - start_time)
        finally:
            self._release()

    async def map(
        self,
        items: Iterable[ItemT],
        fn: Callable[[ItemT, int], Awaitable[R] | R],
    ) -> list[PoolTaskResult[R]]:
        """Run ``fn(item, index)`` for every item under the pool's bound.

        Tasks ask for a slot in input order, so with a free-running pool
        they are admitted in input order too. A failing task never stops
        its siblings.

        Args:
            items: The inputs.
            fn: Function called with each item and its index, either
                ``async def`` or plain.

        Returns:
            One result per input; ``results[i]`` belongs to ``items[i]``
            regardless of the order in which the tasks completed.
        """
        items = list(items)
        log_structured(
            logger,
            logging.DEBUG,
            f"Mapping {len(items)} items with concurrency {self._concurrency}",
            event="map_started",
            items=len(items),
            concurrency=self._concurrency,
        )
        results: list[PoolTaskResult[R] | None] = [None] * len(items)

        async def run(index: int, item: ItemT) -> None:
            results[index] = await self.exec(lambda: fn(item, index))

        await asyncio.gather(*(run(index, item) for index, item in enumerate(items)))
        return results  # type: ignore[return-value]

    async def map_settled(
        self,
        items: Iterable[ItemT],
        fn: Callable[[ItemT, int], Awaitable[R] | R],
    ) -> list[R]:
        """Run ``fn(item, index)`` for every item and keep the successful
        values only.

        Warning:
            Failed tasks are dropped silently from the returned list: the
            errors are lost and the positions of the remaining values no
            longer match the input indices. Use ``map`` to inspect
            failures, or ``map_strict`` to fail loudly. A WARNING is
            logged with the number of discarded failures.

        Args:
            items: The inputs.
            fn: Function called with each item and its index.

        Returns:
            The values of the successful tasks, in input order.
        """
        results = await self.map(items, fn)
        values = [result.value for result in results if result.success]
        failed = len(results) - len(values)
        if failed:
            log_structured(
                logger,
                logging.WARNING,
                f"map_settled discarded {failed}/{len(results)} failed tasks",
                event="map_settled_discarded",
                failed=failed,
                items=len(results),
            )
        return values

    async def map_strict(
        self,
        items: Iterable[ItemT],
        fn: Callable[[ItemT, int], Awaitable[R] | R],
    ) -> list[R]:
        """Run ``fn(item, index)`` for every item and require all of them
        to succeed.

        Every task runs to completion even if some fail.

        Args:
            items: The inputs.
            fn: Function called with each item and its index.

        Returns:
            The values of all tasks, in input order.

        Raises:
            PoolTaskError: If any task failed. It reports the lowest
                failing index, its error (also chained as ``__cause__``)
                and all results.
        """
        results = await self.map(items, fn)
        for index, result in enumerate(results):
            if isinstance(result, TaskFailure):
                raise PoolTaskError(index=index, error=result.error, results=results) from (
                    result.error
                )
        return [result.value for result in results]

    async def _acquire(self) -> None:
        if self._running < self._concurrency:
            self._running += 1
            log_structured(
                logger,
                logging.DEBUG,
                f"Slot acquired ({self._running}/{self._concurrency} running)",
                event="slot_acquired",
                running=self._running,
            )
            return

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        log_structured(
            logger,
            logging.DEBUG,
            f"All {self._concurrency} slots busy, queued at position {len(self._waiters)}",
            event="slot_queued",
            waiting=len(self._waiters),
        )
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # The slot was handed over before the cancellation landed
                self._release()
            elif waiter in self._waiters:
                self._waiters.remove(waiter)
            raise

    def _release(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                # Hand the slot over, running stays unchanged
                waiter.set_result(None)
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"Slot handed to the next waiter ({len(self._waiters)} still waiting)",
                    event="slot_handed_over",
                    waiting=len(self._waiters),
                )
                return
        self._running -= 1
        log_structured(
            logger,
            logging.DEBUG,
            f"Slot released ({self._running}/{self._concurrency} running)",
            event="slot_released",
            running=self._running,
        )
