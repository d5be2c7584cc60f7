r"""Callback manager for the retry lifecycle."""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

from aslot.utils.awaitables import call_maybe_async

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class CallbackManager:
    """Invokes the user-supplied ``on_retry`` hook.

    Args:
        on_retry: Optional hook ``(error, attempt, delay)``, plain or
            ``async def``.
    """

    def __init__(
        self,
        on_retry: Callable[[Exception, int, float], Awaitable[None] | None] | None = None,
    ) -> None:
        self._on_retry = on_retry

    async def on_retry(self, error: Exception, attempt: int, delay: float) -> None:
        """Invoke ``on_retry`` before the backoff wait.

        Exceptions raised by the hook propagate to the caller.

        Args:
            error: The error of the failed attempt.
            attempt: The attempt that failed (1-indexed).
            delay: Seconds about to be waited.
        """
        if self._on_retry is not None:
            await call_maybe_async(self._on_retry, error, attempt, delay)
