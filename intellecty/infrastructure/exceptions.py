"""Infrastructure exceptions for cache and external operations.

Cache errors extend IntellectyException so presentation can map them
to HTTP responses consistently.
"""

from intellecty.domain.exceptions import IntellectyException


class CacheException(IntellectyException):
    """Base exception for cache operations."""


class CacheUnavailableError(CacheException):
    """A write was attempted while the cache has no live connection."""

    def __init__(self, key: str) -> None:
        super().__init__(
            "Cache is not available",
            "CACHE_UNAVAILABLE",
            {"key": key},
        )


class CacheWriteError(CacheException):
    """A cache write (set, delete, increment) failed in transport or encoding."""

    def __init__(self, key: str, operation: str, reason: str) -> None:
        super().__init__(
            f"Cache {operation} failed for key: {key}",
            "CACHE_WRITE_ERROR",
            {"key": key, "operation": operation, "reason": reason},
        )
