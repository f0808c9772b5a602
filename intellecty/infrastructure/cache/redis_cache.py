"""Redis-backed tenant cache.

Provides async Redis caching with TTL, obfuscated payloads and a
best-effort write lock. Keys come from intellecty.infrastructure.cache.keys.

Failure semantics: read operations (get, exists, get_many) log transport
and decode errors and answer as if the key were absent. Write operations
(set, delete, set_many, increment, set_with_lock) log and raise
CacheWriteError / CacheUnavailableError so callers never assume a write
that did not happen. Every command is attempted once; there is no retry.
"""

from __future__ import annotations

import json
import logging
import secrets
import time
from collections.abc import Mapping, Sequence
from typing import Any

import redis.asyncio as redis
from redis.exceptions import WatchError

from intellecty.core.config import Settings, get_settings
from intellecty.infrastructure.cache.keys import lock_key
from intellecty.infrastructure.cache.obfuscation import CacheObfuscator
from intellecty.infrastructure.exceptions import CacheUnavailableError, CacheWriteError

logger = logging.getLogger(__name__)


def _as_text(raw: str | bytes) -> str:
    return raw.decode("utf-8") if isinstance(raw, bytes) else raw


class TenantCache:
    """Async Redis cache with TTL, obfuscation and a single-writer lock hint.

    One instance per process: created at startup (see
    intellecty.core.lifespan), shared by all requests, closed at shutdown.
    Call connect() at startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        redis_client: redis.Redis | None = None,
        obfuscator: CacheObfuscator | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            settings: Settings to use; defaults to get_settings().
            redis_client: Optional Redis client for testing or DI.
            obfuscator: Optional obfuscator; defaults to one keyed by
                settings.cache_obfuscation_key.
        """
        self.settings = settings or get_settings()
        self.redis = redis_client
        self.obfuscator = obfuscator or CacheObfuscator(
            self.settings.cache_obfuscation_key.get_secret_value()
        )
        self.default_ttl = self.settings.cache_default_ttl
        self.default_lock_ttl = self.settings.cache_lock_ttl
        self._connected = False

    async def connect(self) -> None:
        """Create the client (unless injected) and verify it with PING."""
        if self.redis is None:
            password = self.settings.redis_password
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=self.settings.redis_connect_timeout,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
                max_connections=self.settings.redis_max_connections,
            )
        try:
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            await self.redis.aclose()
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ping(self) -> bool:
        """Return True if Redis answers PING (readiness check)."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError:
            logger.warning("Redis ping failed", exc_info=True)
            return False

    def _encode(self, value: Any, obfuscate: bool) -> str:
        serialized = json.dumps(value)
        return self.obfuscator.obfuscate(serialized) if obfuscate else serialized

    def _decode(self, raw: str | bytes, obfuscated: bool) -> Any:
        text = _as_text(raw)
        if obfuscated:
            text = self.obfuscator.reveal(text)
        return json.loads(text)

    def _resolve_ttl(self, ttl: int | None) -> int:
        resolved = self.default_ttl if ttl is None else ttl
        if resolved <= 0:
            raise ValueError(f"Cache TTL must be positive, got {resolved}")
        return resolved

    def _require_client(self, key: str) -> redis.Redis:
        if not self.is_available() or self.redis is None:
            logger.warning("Cache write refused for key %s (Redis unavailable)", key)
            raise CacheUnavailableError(key)
        return self.redis

    async def get(self, key: str, obfuscated: bool = True) -> Any | None:
        """Return cached value (revealed and JSON-decoded) or None.

        None means missing, expired, unreadable or cache unavailable;
        this method never raises for those cases.

        Args:
            key: Cache key (use intellecty.infrastructure.cache.keys builders).
            obfuscated: False for values stored with set(obfuscate=False).
        """
        if not self.is_available() or self.redis is None:
            return None
        try:
            raw = await self.redis.get(key)
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if raw is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            value = self._decode(raw, obfuscated)
        except ValueError:
            logger.exception("Cache decode error for key %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
        obfuscate: bool = True,
    ) -> None:
        """Serialize, optionally obfuscate and store value with TTL.

        Args:
            key: Cache key.
            value: JSON-serializable value.
            ttl: Time-to-live in seconds (default settings.cache_default_ttl).
            obfuscate: Store obfuscated text (default) or plain JSON.

        Raises:
            CacheUnavailableError: Redis is not connected.
            CacheWriteError: Serialization or the Redis command failed.
        """
        ttl = self._resolve_ttl(ttl)
        client = self._require_client(key)
        try:
            payload = self._encode(value, obfuscate)
        except (TypeError, ValueError) as e:
            logger.error("Cache set serialization error for key %s: %s", key, e)
            raise CacheWriteError(key, "set", str(e)) from e
        try:
            await client.set(key, payload, ex=ttl)
        except redis.RedisError as e:
            logger.exception("Cache set error for key %s", key)
            raise CacheWriteError(key, "set", str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key. Deleting an absent key is not an error.

        Raises:
            CacheUnavailableError: Redis is not connected.
            CacheWriteError: The Redis command failed.
        """
        client = self._require_client(key)
        try:
            await client.delete(key)
        except redis.RedisError as e:
            logger.exception("Cache delete error for key %s", key)
            raise CacheWriteError(key, "delete", str(e)) from e
        logger.debug("Cache DELETE: %s", key)

    async def exists(self, key: str) -> bool:
        """Return True if key is present (without reading its value)."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            return await self.redis.exists(key) == 1
        except redis.RedisError:
            logger.exception("Cache exists error for key %s", key)
            return False

    async def set_many(self, pairs: Mapping[str, Any], ttl: int | None = None) -> None:
        """Store every (key, value) pair with the same TTL in one round trip.

        Raises:
            CacheUnavailableError: Redis is not connected.
            CacheWriteError: Serialization or the pipeline failed.
        """
        if not pairs:
            return
        ttl = self._resolve_ttl(ttl)
        batch_label = f"<batch of {len(pairs)}>"
        client = self._require_client(batch_label)
        try:
            encoded = {key: self._encode(value, True) for key, value in pairs.items()}
        except (TypeError, ValueError) as e:
            logger.error("Cache set_many serialization error: %s", e)
            raise CacheWriteError(batch_label, "set_many", str(e)) from e
        try:
            async with client.pipeline(transaction=False) as pipe:
                for key, payload in encoded.items():
                    pipe.set(key, payload, ex=ttl)
                await pipe.execute()
        except redis.RedisError as e:
            logger.exception("Cache set_many error for %s keys", len(pairs))
            raise CacheWriteError(batch_label, "set_many", str(e)) from e
        logger.debug("Cache SET_MANY: %s keys (TTL: %ss)", len(pairs), ttl)

    async def get_many(self, keys: Sequence[str]) -> list[Any | None]:
        """Return values for keys in the same order; None where absent.

        An entry that cannot be decoded is None at its position; a
        transport error yields None for every position.
        """
        if not keys:
            return []
        if not self.is_available() or self.redis is None:
            return [None] * len(keys)
        try:
            raws = await self.redis.mget(list(keys))
        except redis.RedisError:
            logger.exception("Cache get_many error for %s keys", len(keys))
            return [None] * len(keys)
        values: list[Any | None] = []
        for key, raw in zip(keys, raws):
            if raw is None:
                values.append(None)
                continue
            try:
                values.append(self._decode(raw, True))
            except ValueError:
                logger.exception("Cache decode error for key %s", key)
                values.append(None)
        return values

    async def increment(self, key: str, ttl: int | None = None) -> int:
        """Atomically increment a counter and refresh its TTL.

        Counters are stored as plain integers (not obfuscated).

        Returns:
            The value after incrementing (1 for a fresh key).

        Raises:
            CacheUnavailableError: Redis is not connected.
            CacheWriteError: The transaction failed (e.g. key holds a non-integer).
        """
        ttl = self._resolve_ttl(ttl)
        client = self._require_client(key)
        try:
            async with client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, ttl)
                results = await pipe.execute()
        except redis.RedisError as e:
            logger.exception("Cache increment error for key %s", key)
            raise CacheWriteError(key, "increment", str(e)) from e
        return int(results[0])

    async def set_with_lock(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
        lock_ttl: int | None = None,
    ) -> bool:
        """Write value only if no other writer currently holds key's lock.

        The lock is ``<key>:lock`` created with SET NX PX and its own short
        TTL. On success the value is written and the lock released (only if
        it still carries this caller's token); returns True. If the lock is
        already held nothing is written and False is returned.

        This is a mutual-exclusion hint, not a fenced distributed lock: a
        writer that stalls past lock_ttl can still complete its write after
        another writer has taken the lock.

        Raises:
            CacheUnavailableError: Redis is not connected.
            CacheWriteError: Taking the lock or writing the value failed.
        """
        lock_ttl = self.default_lock_ttl if lock_ttl is None else lock_ttl
        if lock_ttl <= 0:
            raise ValueError(f"Lock TTL must be positive, got {lock_ttl}")
        guard = lock_key(key)
        client = self._require_client(guard)
        token = f"{int(time.time() * 1000)}-{secrets.token_hex(8)}"
        try:
            acquired = await client.set(guard, token, px=lock_ttl * 1000, nx=True)
        except redis.RedisError as e:
            logger.exception("Cache lock error for key %s", guard)
            raise CacheWriteError(guard, "lock", str(e)) from e
        if not acquired:
            logger.debug("Cache LOCK busy: %s", guard)
            return False
        try:
            await self.set(key, value, ttl)
        finally:
            await self._release_lock(guard, token)
        return True

    async def _release_lock(self, guard: str, token: str) -> None:
        """Delete guard only if it still holds token (WATCH/MULTI compare-and-delete).

        Release failures are logged, not raised: the lock expires on its own TTL.
        """
        if self.redis is None:
            return
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                await pipe.watch(guard)
                current = await pipe.get(guard)
                if current is not None and _as_text(current) == token:
                    pipe.multi()
                    pipe.delete(guard)
                    await pipe.execute()
                else:
                    await pipe.unwatch()
                    logger.warning("Cache lock %s expired or taken over before release", guard)
        except WatchError:
            logger.warning("Cache lock %s changed during release; left to expire", guard)
        except redis.RedisError:
            logger.warning("Cache lock release failed for %s; left to expire", guard, exc_info=True)
