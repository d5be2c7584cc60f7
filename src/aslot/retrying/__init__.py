r"""Retry engine.

This package runs a single operation repeatedly until it succeeds, a
retry predicate rejects continuing, or the attempt budget is exhausted,
sleeping with exponential backoff between attempts.

Public API:
    - retry: Return the value or raise the last error
    - retry_safe: Return a RetryResult, never raise
    - RetryOptions: Configuration for retry behavior
    - RetryResult / RetryState: Outcome and states of the state machine
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Manager for callback invocations
    - AsyncRetryExecutor: The state machine runner
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackManager",
    "RetryDecider",
    "RetryOptions",
    "RetryResult",
    "RetryState",
    "RetryStrategy",
    "retry",
    "retry_safe",
]

from aslot.results import RetryResult, RetryState
from aslot.retrying.api import retry, retry_safe
from aslot.retrying.config import RetryOptions
from aslot.retrying.decider import RetryDecider
from aslot.retrying.executor_async import AsyncRetryExecutor
from aslot.retrying.manager import CallbackManager
from aslot.retrying.strategy import RetryStrategy
