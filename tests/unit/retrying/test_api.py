r"""Unit tests for retry and retry_safe."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, call

import pytest

from aslot import RetryOptions, RetryState, retry, retry_safe
from aslot.predicates import retry_unless_exception_type

###########################
#     Tests for retry     #
###########################


@pytest.mark.asyncio
async def test_retry_success_first_attempt(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(return_value="ok")
    assert await retry(fn) == "ok"
    fn.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_sync_function(mock_asleep: AsyncMock) -> None:
    fn = Mock(side_effect=[OSError("first"), "ok"])
    assert await retry(fn, RetryOptions(initial_delay=0.5)) == "ok"
    assert fn.call_count == 2
    mock_asleep.assert_awaited_once_with(0.5)


@pytest.mark.asyncio
async def test_retry_raises_last_error_when_exhausted(mock_asleep: AsyncMock) -> None:
    errors = [OSError("attempt 1"), OSError("attempt 2"), OSError("attempt 3")]
    fn = AsyncMock(side_effect=errors)

    with pytest.raises(OSError, match=r"attempt 3") as exc_info:
        await retry(fn, RetryOptions(max_attempts=3))

    assert exc_info.value is errors[2]
    assert fn.await_count == 3
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
async def test_retry_safe_exhausted(mock_asleep: AsyncMock) -> None:
    errors = [OSError("attempt 1"), OSError("attempt 2"), OSError("attempt 3")]
    fn = AsyncMock(side_effect=errors)

    result = await retry_safe(fn, RetryOptions(max_attempts=3))

    assert not result.success
    assert result.value is None
    assert result.attempts == 3
    assert result.errors == errors
    assert result.last_error is errors[2]
    assert result.state is RetryState.EXHAUSTED
    assert result.exhausted
    assert not result.aborted
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
async def test_retry_backoff_delays(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=[RuntimeError(), RuntimeError(), "done"])

    value = await retry(
        fn,
        RetryOptions(max_attempts=4, initial_delay=0.01, backoff_multiplier=2, max_delay=0.1),
    )

    assert value == "done"
    assert fn.await_count == 3
    assert mock_asleep.await_args_list == [call(0.01), call(0.02)]


@pytest.mark.asyncio
async def test_retry_safe_success_after_failures(mock_asleep: AsyncMock) -> None:
    errors = [RuntimeError("1"), RuntimeError("2")]
    fn = AsyncMock(side_effect=[*errors, "done"])

    result = await retry_safe(
        fn,
        RetryOptions(max_attempts=4, initial_delay=0.01, backoff_multiplier=2, max_delay=0.1),
    )

    assert result.success
    assert result.value == "done"
    assert result.attempts == 3
    assert result.errors == errors
    assert result.state is RetryState.SUCCEEDED
    assert mock_asleep.await_args_list == [call(0.01), call(0.02)]


@pytest.mark.asyncio
async def test_retry_delay_capped_by_max_delay(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=[RuntimeError()] * 5)

    result = await retry_safe(
        fn,
        RetryOptions(max_attempts=5, initial_delay=1.0, backoff_multiplier=3.0, max_delay=5.0),
    )

    assert result.attempts == 5
    assert mock_asleep.await_args_list == [call(1.0), call(3.0), call(5.0), call(5.0)]


@pytest.mark.asyncio
async def test_retry_should_retry_false_aborts_immediately(mock_asleep: AsyncMock) -> None:
    error = ValueError("permanent")
    fn = AsyncMock(side_effect=error)
    should_retry = Mock(return_value=False)

    with pytest.raises(ValueError, match=r"permanent"):
        await retry(fn, RetryOptions(max_attempts=5, should_retry=should_retry))

    fn.assert_awaited_once()
    should_retry.assert_called_once_with(error, 1)
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_safe_should_retry_false_aborts(
    mock_asleep: AsyncMock, mock_callback: Mock
) -> None:
    fn = AsyncMock(side_effect=ValueError("permanent"))

    result = await retry_safe(
        fn,
        RetryOptions(
            max_attempts=5, should_retry=lambda error, attempt: False, on_retry=mock_callback
        ),
    )

    assert not result.success
    assert result.attempts == 1
    assert len(result.errors) == 1
    assert len(result.errors) < 5
    assert result.aborted
    assert not result.exhausted
    mock_callback.assert_not_called()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_safe_should_retry_error_is_captured(mock_asleep: AsyncMock) -> None:
    attempt_error = OSError("reset")
    predicate_error = KeyError("classifier")
    fn = AsyncMock(side_effect=attempt_error)

    result = await retry_safe(fn, RetryOptions(should_retry=Mock(side_effect=predicate_error)))

    assert not result.success
    assert result.attempts == 1
    assert result.errors == [attempt_error, predicate_error]
    assert result.last_error is predicate_error
    assert result.state is RetryState.ABORTED
    fn.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_safe_on_retry_error_is_captured(mock_asleep: AsyncMock) -> None:
    attempt_error = OSError("reset")
    hook_error = RuntimeError("hook failed")
    fn = AsyncMock(side_effect=attempt_error)

    result = await retry_safe(
        fn, RetryOptions(max_attempts=5, on_retry=AsyncMock(side_effect=hook_error))
    )

    assert not result.success
    assert result.attempts == 1
    assert result.errors == [attempt_error, hook_error]
    assert result.aborted
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_should_retry_error_propagates(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=OSError("reset"))

    with pytest.raises(KeyError, match=r"classifier"):
        await retry(fn, RetryOptions(should_retry=Mock(side_effect=KeyError("classifier"))))
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_should_retry_classifies_errors(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=[OSError("transient"), ValueError("permanent"), "unreached"])

    result = await retry_safe(
        fn,
        RetryOptions(max_attempts=5, should_retry=retry_unless_exception_type(ValueError)),
    )

    assert result.attempts == 2
    assert result.aborted
    assert isinstance(result.last_error, ValueError)
    assert mock_asleep.await_count == 1


@pytest.mark.asyncio
async def test_retry_should_retry_not_called_on_last_attempt(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=[OSError(), OSError()])
    should_retry = Mock(return_value=True)

    with pytest.raises(OSError):
        await retry(fn, RetryOptions(max_attempts=2, should_retry=should_retry))

    assert should_retry.call_count == 1
    assert mock_asleep.await_count == 1


@pytest.mark.asyncio
async def test_retry_on_retry_called_before_each_wait(
    mock_asleep: AsyncMock, mock_callback: Mock
) -> None:
    errors = [OSError("1"), OSError("2")]
    fn = AsyncMock(side_effect=[*errors, "ok"])

    await retry(fn, RetryOptions(max_attempts=3, initial_delay=0.5, on_retry=mock_callback))

    assert mock_callback.call_args_list == [call(errors[0], 1, 0.5), call(errors[1], 2, 1.0)]
    assert mock_asleep.await_count == 2


@pytest.mark.asyncio
async def test_retry_async_on_retry(
    mock_asleep: AsyncMock, mock_async_callback: AsyncMock
) -> None:
    error = OSError()
    fn = AsyncMock(side_effect=[error, "ok"])

    await retry(fn, RetryOptions(initial_delay=0.25, on_retry=mock_async_callback))

    mock_async_callback.assert_awaited_once_with(error, 1, 0.25)
    mock_asleep.assert_awaited_once_with(0.25)


@pytest.mark.asyncio
async def test_retry_max_attempts_one(mock_asleep: AsyncMock, mock_callback: Mock) -> None:
    fn = AsyncMock(side_effect=OSError("only"))

    result = await retry_safe(fn, RetryOptions(max_attempts=1, on_retry=mock_callback))

    assert result.attempts == 1
    assert result.exhausted
    mock_callback.assert_not_called()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_retry_default_options(mock_asleep: AsyncMock) -> None:
    fn = AsyncMock(side_effect=OSError())

    result = await retry_safe(fn)

    assert result.attempts == 3
    assert mock_asleep.await_args_list == [call(1.0), call(2.0)]


@pytest.mark.asyncio
async def test_retry_real_sleep() -> None:
    fn = Mock(side_effect=[OSError(), "ok"])
    assert await retry(fn, RetryOptions(initial_delay=0.001)) == "ok"
