"""
Test Configuration Module
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from kv_gateway.api.deps import get_kv_repo
from kv_gateway.config import Settings
from kv_gateway.main import app
from kv_gateway.repositories.kv_store_repo import KVStoreRepository
from kv_gateway.repositories.memory import MemoryKVStoreRepository
from kv_gateway.services import KVService


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_repo(clock):
    """Fresh in-memory repository driven by the fake clock"""
    return MemoryKVStoreRepository(clock=clock)


@pytest.fixture
def kv_settings():
    return Settings(
        KV_STORE_TYPE="memory",
        KV_TTL_SECONDS=3600,
        KV_SCAN_PAGE_SIZE=10,
        KV_OPERATION_TIMEOUT_SECONDS=1.0,
        KV_FETCH_ALL_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
def kv_service(memory_repo, kv_settings):
    return KVService(memory_repo, settings=kv_settings)


@pytest_asyncio.fixture
async def client(memory_repo):
    """HTTP client bound to the app, backed by the in-memory repository"""
    app.dependency_overrides[get_kv_repo] = lambda: memory_repo
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides = {}


@pytest.fixture
def mock_repo():
    """Repository double; configure return values and side effects per test"""
    return AsyncMock(spec=KVStoreRepository)


@pytest_asyncio.fixture
async def mock_client(mock_repo):
    """HTTP client bound to the app, backed by `mock_repo`"""
    app.dependency_overrides[get_kv_repo] = lambda: mock_repo
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides = {}
