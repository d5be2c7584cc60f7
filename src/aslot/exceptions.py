r"""Exception types raised by aslot.

Task failures are never raised by the pool: they are captured into
``TaskFailure`` results. The exceptions below are the only ones the
package raises on its own.
"""

from __future__ import annotations

__all__ = ["AslotError", "ConfigurationError", "PoolTaskError"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aslot.results import PoolTaskResult


class AslotError(Exception):
    """Base class for all errors raised by aslot."""


class ConfigurationError(AslotError, ValueError):
    """Raised when a pool or retry policy is built with invalid parameters.

    It subclasses ``ValueError`` so callers validating input can catch
    either type.

    Example:
        ```pycon
        >>> from aslot import Pool
        >>> from aslot.exceptions import ConfigurationError
        >>> try:
        ...     Pool(concurrency=0)
        ... except ConfigurationError as exc:
        ...     print(exc)
        ...
        concurrency must be an integer >= 1, got 0

        ```
    """


class PoolTaskError(AslotError):
    """Raised by ``Pool.map_strict`` when at least one task failed.

    Args:
        index: The input index of the first failed task.
        error: The exception raised by that task.
        results: All task results, in input order.

    Attributes:
        index: The input index of the first failed task.
        error: The exception raised by that task.
        results: All task results, in input order.
    """

    def __init__(
        self,
        index: int,
        error: Exception,
        results: Sequence[PoolTaskResult[Any]],
    ) -> None:
        failed = sum(1 for result in results if not result.success)
        super().__init__(
            f"task at index {index} failed ({failed}/{len(results)} tasks failed): {error!r}"
        )
        self.index = index
        self.error = error
        self.results = list(results)
