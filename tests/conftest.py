"""
Test Configuration Module
"""

from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

from yandex_model_provider.config import get_settings
from yandex_model_provider.providers.transport import YandexTransport

from tests.fixtures import API_KEY

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Every test sees configuration built from its own environment"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def make_transport() -> AsyncGenerator[Callable[[Handler], YandexTransport], None]:
    """Create transports whose requests are answered by a handler function"""
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Handler) -> YandexTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return YandexTransport(API_KEY, client=client)

    yield _make

    for client in clients:
        await client.aclose()
