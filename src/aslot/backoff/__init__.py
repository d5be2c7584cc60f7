r"""Backoff strategies for delays between retry attempts.

This package provides exponential (the default), linear and constant
backoff patterns.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "LinearBackoff",
]

from aslot.backoff.base import BaseBackoffStrategy
from aslot.backoff.constant import ConstantBackoff
from aslot.backoff.exponential import ExponentialBackoff
from aslot.backoff.linear import LinearBackoff
