r"""Configuration defaults and parameter validation shared by the pool
and the retry engine."""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_MULTIPLIER",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "RETRY_STATUS_CODES",
    "PoolOptions",
    "validate_concurrency",
    "validate_retry_params",
]

from aslot.core.config import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    RETRY_STATUS_CODES,
    PoolOptions,
)
from aslot.core.validation import validate_concurrency, validate_retry_params
