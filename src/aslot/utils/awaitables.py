r"""Helpers for calling functions that may or may not be coroutines."""

from __future__ import annotations

__all__ = ["call_maybe_async"]

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


async def call_maybe_async(func: Callable[..., Any], *args: Any) -> Any:
    """Call ``func`` and await its result if it is awaitable.

    Tasks, operations and callbacks can be ``async def`` functions or
    plain functions, so both are accepted everywhere.

    Args:
        func: The function to call.
        *args: Positional arguments passed to ``func``.

    Returns:
        The returned value, awaited if needed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aslot.utils.awaitables import call_maybe_async
        >>> async def double(x):
        ...     return x * 2
        ...
        >>> asyncio.run(call_maybe_async(double, 21))
        42
        >>> asyncio.run(call_maybe_async(lambda x: x + 1, 41))
        42

        ```
    """
    result = func(*args)
    if inspect.isawaitable(result):
        return await result
    return result
