"""
Pytest configuration and fixtures for StudyBolt backend tests.
"""
import os
from collections.abc import AsyncGenerator

# Settings are read when studybolt.main is imported
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("MISTRAL_AGENT_ID", "ag:test-agent")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from studybolt.infrastructure.cache.memory_store import MemoryCacheStore
from studybolt.infrastructure.search.base import SearchProvider
from studybolt.infrastructure.search.mock_provider import MockSearchProvider
from studybolt.main import create_app
from tests.fakes import FakeAgentClient, FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(fake_clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=fake_clock)


@pytest.fixture
def agent_client() -> FakeAgentClient:
    return FakeAgentClient()


@pytest.fixture
def search_provider() -> SearchProvider:
    return MockSearchProvider()


@pytest.fixture
def app(
    cache_store: MemoryCacheStore,
    agent_client: FakeAgentClient,
    search_provider: SearchProvider,
) -> FastAPI:
    """Create test FastAPI application with fake collaborators."""
    application = create_app()
    application.state.cache_store = cache_store
    application.state.agent_client = agent_client
    application.state.search_provider = search_provider
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
