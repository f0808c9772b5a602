"""Tier gating: feature access and quota checks for a tenant's tier.

The check_* methods answer questions; the require_* methods raise when the
answer is no, for use at the start of a gated operation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from intellecty.domain.entities.product import ALL_PRODUCTS
from intellecty.domain.entities.tenant import UNLIMITED, Tenant
from intellecty.domain.exceptions import FeatureNotAvailableException, TierLimitExceededException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LimitCheck:
    """Outcome of a quota check; limit is -1 when the tier is unlimited."""

    allowed: bool
    current: int
    limit: int


class TierGatingService:
    """Evaluates a tenant's requests against its tier's features and quotas."""

    def check_feature_access(self, tenant: Tenant, feature: str) -> bool:
        return tenant.limits.has_feature(feature)

    def check_sku_limit(self, tenant: Tenant, current_skus: int | None = None) -> LimitCheck:
        """Whether the tenant may add another SKU (defaults to the catalog size)."""
        current = len(ALL_PRODUCTS) if current_skus is None else current_skus
        limit = tenant.limits.max_skus
        return LimitCheck(tenant.limits.allows(limit, current), current, limit)

    def check_user_limit(self, tenant: Tenant, current_users: int) -> LimitCheck:
        limit = tenant.limits.max_users
        return LimitCheck(tenant.limits.allows(limit, current_users), current_users, limit)

    def check_forecast_limit(self, tenant: Tenant, requested_days: int) -> LimitCheck:
        """Whether a forecast of requested_days fits the tier's horizon."""
        limit = tenant.limits.max_forecast_days
        allowed = limit == UNLIMITED or requested_days <= limit
        return LimitCheck(allowed, requested_days, limit)

    def require_feature(self, tenant: Tenant, feature: str) -> None:
        """Raise FeatureNotAvailableException unless the tier includes feature."""
        if not self.check_feature_access(tenant, feature):
            logger.info("Tenant %s (%s) denied feature %s", tenant.id, tenant.tier.value, feature)
            raise FeatureNotAvailableException(feature, tenant.tier.value)

    def require_forecast_horizon(self, tenant: Tenant, requested_days: int) -> None:
        """Raise TierLimitExceededException if requested_days exceeds the tier's horizon."""
        check = self.check_forecast_limit(tenant, requested_days)
        if not check.allowed:
            logger.info(
                "Tenant %s (%s) denied %s-day forecast (limit %s)",
                tenant.id,
                tenant.tier.value,
                requested_days,
                check.limit,
            )
            raise TierLimitExceededException(
                "forecast_days",
                requested_days,
                check.limit,
                f"Forecast horizon limit exceeded. Requested: {requested_days} days, "
                f"Limit: {check.limit} days",
            )
