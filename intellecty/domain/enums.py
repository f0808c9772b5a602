"""Domain enumerations."""

from enum import Enum


class Vertical(str, Enum):
    """Industry vertical a product or tenant belongs to."""

    INDUSTRIAL = "INDUSTRIAL"
    APPAREL = "APPAREL"
    GENERAL = "GENERAL"


class TenantTier(str, Enum):
    """Subscription tier of a tenant."""

    FREE = "FREE"
    GROWTH = "GROWTH"
    PREMIUM = "PREMIUM"


class StockStatus(str, Enum):
    """Stock health relative to safety stock and reorder point."""

    CRITICAL = "critical"
    LOW = "low"
    HEALTHY = "healthy"


class AbcClass(str, Enum):
    """ABC inventory classification."""

    A = "A"
    B = "B"
    C = "C"
