r"""Unit tests for the retry delay strategy."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from aslot import RetryOptions
from aslot.backoff import ExponentialBackoff, LinearBackoff
from aslot.retrying import RetryStrategy


def test_retry_strategy_from_options_default() -> None:
    strategy = RetryStrategy.from_options(RetryOptions())

    assert isinstance(strategy.backoff_strategy, ExponentialBackoff)
    assert strategy.backoff_strategy.initial_delay == 1.0
    assert strategy.backoff_strategy.multiplier == 2.0
    assert strategy.max_delay == 30.0
    assert strategy.jitter_factor == 0.0


@pytest.mark.parametrize(
    ("attempt", "delay"), [(1, 1.0), (2, 2.0), (3, 4.0), (5, 16.0), (6, 30.0), (50, 30.0)]
)
def test_retry_strategy_default_delays(attempt: int, delay: float) -> None:
    assert RetryStrategy.from_options(RetryOptions()).calculate_delay(attempt) == delay


def test_retry_strategy_custom_backoff_capped() -> None:
    strategy = RetryStrategy.from_options(
        RetryOptions(backoff_strategy=LinearBackoff(base_delay=2.0), max_delay=5.0)
    )
    assert strategy.calculate_delay(1) == 2.0
    assert strategy.calculate_delay(2) == 4.0
    assert strategy.calculate_delay(3) == 5.0


def test_retry_strategy_jitter() -> None:
    strategy = RetryStrategy.from_options(RetryOptions(initial_delay=1.0, jitter_factor=0.5))
    with patch("aslot.utils.delay.random.uniform", return_value=0.25):
        assert strategy.calculate_delay(1) == 1.25


def test_retry_strategy_huge_attempt_does_not_overflow() -> None:
    strategy = RetryStrategy.from_options(RetryOptions(max_delay=10.0))
    assert strategy.calculate_delay(5000) == 10.0


def test_retry_strategy_jitter_capped_by_max_delay() -> None:
    strategy = RetryStrategy.from_options(
        RetryOptions(initial_delay=1.0, max_delay=1.2, jitter_factor=1.0)
    )
    with patch("aslot.utils.delay.random.uniform", return_value=0.5):
        assert strategy.calculate_delay(1) == 1.2
        assert strategy.calculate_delay(10) == 1.2
