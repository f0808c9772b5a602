"""Tenant entity, tier limits and the demo tenant registry."""

from __future__ import annotations

from dataclasses import dataclass

from intellecty.domain.enums import TenantTier

# -1 means unlimited
UNLIMITED = -1

_BASE_FEATURES = (
    "basic_forecasting",
    "inventory_health",
    "excel_templates",
    "basic_analytics",
)
_GROWTH_FEATURES = _BASE_FEATURES + (
    "full_ai_ensemble",
    "external_data_integration",
    "automated_replenishment",
    "advanced_analytics",
    "api_access",
    "multi_user_collaboration",
)
_PREMIUM_FEATURES = _GROWTH_FEATURES + (
    "white_label_options",
    "custom_ai_models",
    "dedicated_support",
    "sso_integration",
    "advanced_security",
    "custom_deployments",
    "unlimited_forecasting",
    "unlimited_users",
    "unlimited_skus",
)


@dataclass(frozen=True)
class TierLimits:
    """Quotas and feature flags of a subscription tier."""

    max_skus: int
    max_users: int
    max_forecast_days: int
    max_data_connectors: int
    features: tuple[str, ...]

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def allows(self, limit: int, current: int) -> bool:
        """True if current usage is below limit (or limit is unlimited)."""
        return limit == UNLIMITED or current < limit


TIER_LIMITS: dict[TenantTier, TierLimits] = {
    TenantTier.FREE: TierLimits(100, 1, 7, 3, _BASE_FEATURES),
    TenantTier.GROWTH: TierLimits(1000, 5, 30, 10, _GROWTH_FEATURES),
    TenantTier.PREMIUM: TierLimits(UNLIMITED, UNLIMITED, 365, UNLIMITED, _PREMIUM_FEATURES),
}


@dataclass(frozen=True)
class Tenant:
    """A customer organization; its data is isolated by cache key namespace."""

    id: str
    name: str
    tier: TenantTier
    data_connectors: int = 0

    @property
    def limits(self) -> TierLimits:
        return TIER_LIMITS[self.tier]


DEMO_TENANTS: dict[str, Tenant] = {
    t.id: t
    for t in (
        Tenant("demo-tenant", "Demo Company", TenantTier.FREE, data_connectors=2),
        Tenant("acme-growth", "Acme Industrial Supply", TenantTier.GROWTH, data_connectors=4),
        Tenant("globex-premium", "Globex Fashion Group", TenantTier.PREMIUM, data_connectors=9),
    )
}


def find_tenant(tenant_id: str) -> Tenant | None:
    """Return the registered tenant with tenant_id, or None."""
    return DEMO_TENANTS.get(tenant_id)
