"""Pytest configuration and fixtures for intellecty.

HTTP tests run against intellecty.main:app through httpx's ASGI transport.
Redis is replaced by an in-process fakeredis server injected into
TenantCache, so no Redis instance is needed.
"""

import os

import fakeredis
import httpx
import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.pop("OPENWEATHER_API_KEY", None)

from intellecty.core.config import get_settings  # noqa: E402
from intellecty.core.limiter import limiter  # noqa: E402
from intellecty.infrastructure.cache import TenantCache  # noqa: E402
from intellecty.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Start every test with empty rate-limit windows."""
    limiter.reset()


@pytest.fixture
async def fake_redis() -> fakeredis.FakeAsyncRedis:
    """Async fake Redis with its own server (no data shared between tests)."""
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def cache(fake_redis: fakeredis.FakeAsyncRedis) -> TenantCache:
    """Connected TenantCache backed by fake_redis."""
    tenant_cache = TenantCache(get_settings(), redis_client=fake_redis)
    await tenant_cache.connect()
    return tenant_cache


@pytest.fixture
def offline_cache() -> TenantCache:
    """TenantCache that was never connected (Redis unavailable)."""
    return TenantCache(get_settings())


@pytest.fixture
async def client(cache: TenantCache) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the fake cache on app.state."""
    app.state.cache = cache
    async with httpx.AsyncClient() as outbound:
        app.state.http_client = outbound
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
