"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the shared outbound
HTTP client and the process-wide tenant cache.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from intellecty.core.config import get_settings
from intellecty.infrastructure.cache import TenantCache
from intellecty.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    A cache already present on app.state (tests) is connected but not
    replaced. With redis disabled app.state.cache is an unconnected
    TenantCache, so reads miss and writes raise CacheUnavailableError.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(timeout=settings.external_api_timeout_seconds)

    cache = getattr(app.state, "cache", None)
    if cache is None:
        cache = TenantCache(settings)
        app.state.cache = cache
    if settings.redis_enabled:
        await cache.connect()
    else:
        logger.info("Redis disabled; running without cache")

    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)

    yield

    # ---- Shutdown ----
    await app.state.http_client.aclose()
    app.state.http_client = None
    logger.info("HTTP client closed")

    await app.state.cache.disconnect()
