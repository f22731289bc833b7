from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from cloudtargets.core.config import ClientConfig
from tests.helpers import BASE_URL

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def config() -> ClientConfig:
    """Create a client configuration pointing at the mock service."""
    return ClientConfig(token="secret-token", api_version=2, base_url=BASE_URL)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing poll callbacks."""
    return Mock()
