r"""Utilities shared by the pool and the retry engine: the delay
primitive, backoff delay calculation, sync/async call adaptation and
structured logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "calculate_sleep_time",
    "call_maybe_async",
    "log_structured",
    "sleep",
    "task_label",
]

from aslot.utils.awaitables import call_maybe_async
from aslot.utils.delay import calculate_sleep_time, sleep
from aslot.utils.structured_logging import StructuredFormatter, log_structured, task_label
