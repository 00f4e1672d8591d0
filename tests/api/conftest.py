"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient

from admanager_relay.api.dependencies import get_admanager_client
from admanager_relay.api.main import create_app
from admanager_relay.core.config import Settings


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Application built around the configured test settings."""
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client_factory() -> Callable[[FastAPI], AsyncClient]:
    """Build an AsyncClient that returns 500 responses instead of raising."""

    def factory(application: FastAPI) -> AsyncClient:
        transport = httpx.ASGITransport(app=application, raise_app_exceptions=False)
        return AsyncClient(transport=transport, base_url="http://test")

    return factory


@pytest_asyncio.fixture
async def async_client(app, client_factory) -> AsyncGenerator[AsyncClient, None]:
    async with client_factory(app) as client:
        yield client


@pytest_asyncio.fixture
async def mocked_client(
    app, client_factory, mock_admanager_client
) -> AsyncGenerator[AsyncClient, None]:
    """Client whose Ad Manager calls go to the shared mock."""
    app.dependency_overrides[get_admanager_client] = lambda: mock_admanager_client
    async with client_factory(app) as client:
        yield client
