"""Cache protocol used by services and strategies (DIP)."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for tenant cache backends (e.g. Redis)."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str, obfuscated: bool = True) -> Any:
        """Return cached value or None."""
        ...

    async def set(
        self, key: str, value: Any, ttl: int | None = None, obfuscate: bool = True
    ) -> None:
        """Store value with TTL in seconds. Raises on failure."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key from cache. Raises on failure; absent key is not an error."""
        ...

    async def exists(self, key: str) -> bool:
        """Return True if key is present."""
        ...

    async def set_many(self, pairs: Mapping[str, Any], ttl: int | None = None) -> None:
        """Store several values in one round trip. Raises on failure."""
        ...

    async def get_many(self, keys: Sequence[str]) -> list[Any]:
        """Return values in key order; None where absent."""
        ...

    async def increment(self, key: str, ttl: int | None = None) -> int:
        """Increment counter and refresh TTL; return the new value."""
        ...

    async def set_with_lock(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
        lock_ttl: int | None = None,
    ) -> bool:
        """Write value only if the key's lock could be taken; return True if written."""
        ...
