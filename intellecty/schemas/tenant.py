"""Tenant info schemas."""

from intellecty.domain.enums import TenantTier
from intellecty.schemas.common import CamelModel


class TenantFeatures(CamelModel):
    max_skus: int
    max_forecast_horizon: int
    max_data_connectors: int
    has_advanced_analytics: bool
    has_custom_models: bool
    has_priority_support: bool
    enabled: list[str]


class TenantUsage(CamelModel):
    current_skus: int
    current_data_connectors: int
    current_forecast_horizon: int
    api_calls_today: int | None


class TenantLimits(CamelModel):
    """Tier quotas; -1 means unlimited."""

    sku_limit: int
    user_limit: int
    forecast_horizon_limit: int
    data_connector_limit: int


class TenantInfo(CamelModel):
    """Response data for GET /tenants/info."""

    tenant_id: str
    tenant_name: str
    tier: TenantTier
    features: TenantFeatures
    usage: TenantUsage
    limits: TenantLimits
