"""Cache key builders. Single place for key format.

Keys are ``<tenant>:<namespace>:<part>...`` joined with CACHE_KEY_SEP.
Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys. Every builder is a pure function of its inputs.
"""

import hashlib
import json
from typing import Any

from intellecty.core.constants import (
    CACHE_KEY_SEP,
    CACHE_LOCK_SUFFIX,
    CACHE_NS_ANALYTICS,
    CACHE_NS_EXTERNAL_API,
    CACHE_NS_FORECAST,
    CACHE_NS_INVENTORY,
    CACHE_NS_MODEL,
    CACHE_NS_SESSION,
    CACHE_NS_UPLOAD,
    CACHE_NS_USAGE,
    GLOBAL_TENANT,
    SECURE_KEY_DIGEST_LENGTH,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def generate_cache_key(tenant_id: str, namespace: str, *parts: str) -> str:
    """Join tenant, namespace and parts into a cache key.

    Args:
        tenant_id: Tenant that owns the entry (or GLOBAL_TENANT).
        namespace: Logical purpose of the entry (e.g. 'forecast').
        *parts: Discriminating parts (product id, horizon, ...).

    Returns:
        Deterministic key string.

    Raises:
        ValueError: If any component is empty or contains the separator.
    """
    _validate_key_component(tenant_id, "tenant_id")
    _validate_key_component(namespace, "namespace")
    for i, part in enumerate(parts):
        _validate_key_component(part, f"parts[{i}]")
    return CACHE_KEY_SEP.join([tenant_id, namespace, *parts])


def canonical_digest(payload: Any, length: int = SECURE_KEY_DIGEST_LENGTH) -> str:
    """SHA-256 of the canonical JSON form of payload, truncated to length hex chars."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:length]


def generate_secure_cache_key(tenant_id: str, namespace: str, payload: Any) -> str:
    """Cache key whose final part is a short digest of payload.

    Keeps the plaintext that drives the key out of the keyspace. The
    truncated digest trades a small collision risk for a short key.
    """
    return generate_cache_key(tenant_id, namespace, canonical_digest(payload))


def lock_key(key: str) -> str:
    """Lock key guarding writes to key."""
    return f"{key}{CACHE_KEY_SEP}{CACHE_LOCK_SUFFIX}"


def session_key(tenant_id: str, user_id: str) -> str:
    """Cache key for a user session."""
    return generate_cache_key(tenant_id, CACHE_NS_SESSION, user_id)


def forecast_key(tenant_id: str, product_id: str, horizon: int) -> str:
    """Cache key for a product demand forecast over horizon days."""
    return generate_cache_key(tenant_id, CACHE_NS_FORECAST, product_id, str(horizon))


def inventory_key(tenant_id: str, product_id: str) -> str:
    """Cache key for inventory data of a product."""
    return generate_cache_key(tenant_id, CACHE_NS_INVENTORY, product_id)


def external_api_key(api_name: str, params: str) -> str:
    """Cache key for an external API response (shared across tenants)."""
    return generate_cache_key(GLOBAL_TENANT, CACHE_NS_EXTERNAL_API, api_name, params)


def analytics_key(tenant_id: str, report_type: str, date_range: str) -> str:
    """Cache key for an analytics report."""
    return generate_cache_key(tenant_id, CACHE_NS_ANALYTICS, report_type, date_range)


def model_prediction_key(tenant_id: str, model_type: str, input_hash: str) -> str:
    """Cache key for a model prediction (secure: inputs are hashed)."""
    return generate_secure_cache_key(
        tenant_id, CACHE_NS_MODEL, {"modelType": model_type, "inputHash": input_hash}
    )


def upload_key(tenant_id: str, payload: Any) -> str:
    """Cache key for a processed upload, keyed by a digest of its content descriptor."""
    return generate_secure_cache_key(tenant_id, CACHE_NS_UPLOAD, payload)


def usage_key(tenant_id: str, metric: str, day: str) -> str:
    """Cache key for a per-tenant daily usage counter (day as YYYY-MM-DD)."""
    return generate_cache_key(tenant_id, CACHE_NS_USAGE, metric, day)
