"""Cache: tenant-scoped Redis cache, key builders and access patterns.

Used by application services for external API responses, forecasts,
analytics reports, uploads and usage counters. Key format lives in keys.py.
"""

from intellecty.infrastructure.cache.cache_protocol import CacheProtocol
from intellecty.infrastructure.cache.keys import (
    analytics_key,
    external_api_key,
    forecast_key,
    generate_cache_key,
    generate_secure_cache_key,
    inventory_key,
    lock_key,
    model_prediction_key,
    session_key,
    upload_key,
    usage_key,
)
from intellecty.infrastructure.cache.obfuscation import CacheObfuscator
from intellecty.infrastructure.cache.redis_cache import TenantCache
from intellecty.infrastructure.cache.strategies import CacheStrategies

__all__ = [
    "CacheObfuscator",
    "CacheProtocol",
    "CacheStrategies",
    "TenantCache",
    "analytics_key",
    "external_api_key",
    "forecast_key",
    "generate_cache_key",
    "generate_secure_cache_key",
    "inventory_key",
    "lock_key",
    "model_prediction_key",
    "session_key",
    "upload_key",
    "usage_key",
]
