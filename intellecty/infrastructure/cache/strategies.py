"""Cache access patterns layered on a CacheProtocol.

Pure functions of the cache: no state beyond the cache they wrap.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from intellecty.infrastructure.cache.cache_protocol import CacheProtocol
from intellecty.infrastructure.exceptions import CacheException

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheStrategies:
    """Cache-aside, write-through and write-behind over one cache."""

    def __init__(self, cache: CacheProtocol) -> None:
        self.cache = cache

    async def cache_aside(
        self,
        key: str,
        producer: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
        validate: Callable[[Any], T] | None = None,
    ) -> T:
        """Return the cached value for key, or produce, store and return it.

        Producer errors propagate unchanged. A failure to store the produced
        value is logged and the value is still returned. None results are
        returned but not cached. With the cache unavailable the producer is
        called directly.

        When validate is given, both cached and produced values are passed
        through it. A cached value it rejects with a pydantic ValidationError
        is logged and treated as a miss.
        """
        if self.cache.is_available():
            cached: Any = await self.cache.get(key)
            if cached is not None:
                if validate is None:
                    return cached
                try:
                    return validate(cached)
                except ValidationError as e:
                    logger.warning(
                        "Discarding cached value for %s (%s validation errors)", key, e.error_count()
                    )
        value = await producer()
        if value is None:
            return value
        if self.cache.is_available():
            try:
                await self.cache.set(key, value, ttl)
            except CacheException as e:
                logger.warning("Cache-aside store skipped for %s: %s", key, e.message)
        return validate(value) if validate is not None else value

    async def write_through(
        self,
        key: str,
        value: T,
        writer: Callable[[T], Awaitable[None]],
        ttl: int | None = None,
    ) -> None:
        """Write to the authoritative store, then to the cache.

        The cache is only updated if writer succeeds. Errors from either
        step propagate.
        """
        await writer(value)
        await self.cache.set(key, value, ttl)

    async def write_behind(
        self,
        key: str,
        value: T,
        writer: Callable[[T], Awaitable[None]],
        ttl: int | None = None,
    ) -> None:
        """Update the cache first, then await the authoritative write.

        The write is not deferred to a queue; it completes before this
        returns. Errors from either step propagate, so a failed writer
        leaves the cache ahead of the store until the entry expires.
        """
        await self.cache.set(key, value, ttl)
        await writer(value)
