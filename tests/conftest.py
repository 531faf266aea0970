from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from aresdex.core import ClientConfig

if TYPE_CHECKING:
    from collections.abc import Generator

HOST = "https://indexer.example.com"
INTERNAL_HOST = "https://internal.example.com"


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Collect the requests received by ``recording_transport``."""
    return []


@pytest.fixture
def responses() -> list[httpx.Response | Exception]:
    """Queue of responses (or exceptions to raise) served in order by
    ``recording_transport``. The last item is repeated when the queue
    runs out."""
    return []


@pytest.fixture
def recording_transport(
    sent_requests: list[httpx.Request], responses: list[httpx.Response | Exception]
) -> httpx.MockTransport:
    """Create a mock transport recording each request and serving the
    queued responses."""

    def handler(request: httpx.Request) -> httpx.Response:
        sent_requests.append(request)
        item = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    return httpx.MockTransport(handler)


@pytest.fixture
def config() -> ClientConfig:
    """Create a configuration without credentials."""
    return ClientConfig(host=HOST, internal_host=INTERNAL_HOST)
