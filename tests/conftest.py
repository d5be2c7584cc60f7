from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch asyncio.sleep used by the delay primitive so backoff
    delays are recorded instead of waited."""
    with patch("aslot.utils.delay.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing on_retry hooks."""
    return Mock()


@pytest.fixture
def mock_async_callback() -> AsyncMock:
    """Create an async mock callback function for testing on_retry
    hooks."""
    return AsyncMock()
