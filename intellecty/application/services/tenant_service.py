"""Tenant tier, limits and usage reporting."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from intellecty.domain.entities.product import ALL_PRODUCTS
from intellecty.domain.entities.tenant import Tenant
from intellecty.infrastructure.cache import CacheProtocol, usage_key
from intellecty.schemas.tenant import TenantFeatures, TenantInfo, TenantLimits, TenantUsage

logger = logging.getLogger(__name__)

API_CALLS_METRIC = "api_calls"
DEFAULT_FORECAST_HORIZON = 30


def today_utc() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class TenantService:
    """Reports a tenant's tier features, quotas and current usage."""

    def __init__(self, cache: CacheProtocol, usage_ttl: int) -> None:
        self.cache = cache
        self.usage_ttl = usage_ttl

    async def record_api_call(self, tenant_id: str) -> int:
        """Count one API call for tenant today; returns the new daily total.

        Raises:
            CacheException: the counter could not be updated.
        """
        return await self.cache.increment(
            usage_key(tenant_id, API_CALLS_METRIC, today_utc()), self.usage_ttl
        )

    async def api_calls_today(self, tenant_id: str) -> int | None:
        """Today's API call count, or None when the counter is unavailable."""
        if not self.cache.is_available():
            return None
        value = await self.cache.get(
            usage_key(tenant_id, API_CALLS_METRIC, today_utc()), obfuscated=False
        )
        return int(value) if value is not None else 0

    async def info(self, tenant: Tenant) -> TenantInfo:
        limits = tenant.limits
        return TenantInfo(
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            tier=tenant.tier,
            features=TenantFeatures(
                max_skus=limits.max_skus,
                max_forecast_horizon=limits.max_forecast_days,
                max_data_connectors=limits.max_data_connectors,
                has_advanced_analytics=limits.has_feature("advanced_analytics"),
                has_custom_models=limits.has_feature("custom_ai_models"),
                has_priority_support=limits.has_feature("dedicated_support"),
                enabled=list(limits.features),
            ),
            usage=TenantUsage(
                current_skus=len(ALL_PRODUCTS),
                current_data_connectors=tenant.data_connectors,
                current_forecast_horizon=min(DEFAULT_FORECAST_HORIZON, limits.max_forecast_days),
                api_calls_today=await self.api_calls_today(tenant.id),
            ),
            limits=TenantLimits(
                sku_limit=limits.max_skus,
                user_limit=limits.max_users,
                forecast_horizon_limit=limits.max_forecast_days,
                data_connector_limit=limits.max_data_connectors,
            ),
        )
