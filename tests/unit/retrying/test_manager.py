r"""Unit tests for the retry callback manager."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from aslot.retrying import CallbackManager


@pytest.mark.asyncio
async def test_callback_manager_without_hook() -> None:
    await CallbackManager().on_retry(OSError(), 1, 0.5)


@pytest.mark.asyncio
async def test_callback_manager_sync_hook(mock_callback: Mock) -> None:
    error = OSError()
    await CallbackManager(mock_callback).on_retry(error, 2, 1.5)
    mock_callback.assert_called_once_with(error, 2, 1.5)


@pytest.mark.asyncio
async def test_callback_manager_async_hook(mock_async_callback: AsyncMock) -> None:
    error = OSError()
    await CallbackManager(mock_async_callback).on_retry(error, 1, 0.5)
    mock_async_callback.assert_awaited_once_with(error, 1, 0.5)
