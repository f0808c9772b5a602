"""Domain entities and the demo reference data.

Pure domain models; no cache or HTTP concerns.
"""

from intellecty.domain.entities.product import (
    ALL_PRODUCTS,
    Product,
    filter_products,
    find_product,
)
from intellecty.domain.entities.tenant import (
    DEMO_TENANTS,
    TIER_LIMITS,
    Tenant,
    TierLimits,
    find_tenant,
)

__all__ = [
    "ALL_PRODUCTS",
    "DEMO_TENANTS",
    "TIER_LIMITS",
    "Product",
    "Tenant",
    "TierLimits",
    "filter_products",
    "find_product",
    "find_tenant",
]
