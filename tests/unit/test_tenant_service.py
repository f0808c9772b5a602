"""Tests for tier limits and tenant info reporting."""

from intellecty.application.services.tenant_service import TenantService
from intellecty.domain.entities.tenant import (
    TIER_LIMITS,
    UNLIMITED,
    find_tenant,
)
from intellecty.domain.enums import TenantTier
from intellecty.infrastructure.cache import TenantCache


def test_tier_limits() -> None:
    free = TIER_LIMITS[TenantTier.FREE]
    premium = TIER_LIMITS[TenantTier.PREMIUM]
    assert free.max_skus == 100
    assert free.allows(free.max_skus, 99) is True
    assert free.allows(free.max_skus, 100) is False
    assert premium.max_skus == UNLIMITED
    assert premium.allows(premium.max_skus, 10**9) is True


def test_features_grow_with_tier() -> None:
    free = set(TIER_LIMITS[TenantTier.FREE].features)
    growth = set(TIER_LIMITS[TenantTier.GROWTH].features)
    premium = set(TIER_LIMITS[TenantTier.PREMIUM].features)
    assert free < growth < premium
    assert TIER_LIMITS[TenantTier.GROWTH].has_feature("advanced_analytics")
    assert not TIER_LIMITS[TenantTier.FREE].has_feature("advanced_analytics")


def test_find_tenant() -> None:
    assert find_tenant("globex-premium").tier is TenantTier.PREMIUM
    assert find_tenant("unknown") is None


async def test_info_reports_usage_counter(cache: TenantCache) -> None:
    service = TenantService(cache, usage_ttl=3600)
    tenant = find_tenant("acme-growth")
    assert await service.record_api_call(tenant.id) == 1
    assert await service.record_api_call(tenant.id) == 2
    info = await service.info(tenant)
    assert info.tier is TenantTier.GROWTH
    assert info.usage.api_calls_today == 2
    assert info.limits.sku_limit == 1000
    assert info.features.has_advanced_analytics is True
    assert info.usage.current_data_connectors == 4


async def test_info_without_cache(offline_cache: TenantCache) -> None:
    info = await TenantService(offline_cache, usage_ttl=3600).info(find_tenant("demo-tenant"))
    assert info.usage.api_calls_today is None
    assert info.features.max_forecast_horizon == 7
    assert info.usage.current_forecast_horizon == 7
