"""Inventory API schemas."""

from pydantic import Field

from intellecty.domain.enums import StockStatus, Vertical
from intellecty.schemas.common import CamelModel


class InventoryItem(CamelModel):
    """Stock position and health of one product."""

    product_id: str
    product_name: str
    sku: str
    category: str
    vertical: Vertical
    current_stock: int
    reorder_point: int
    safety_stock: int
    lead_time: int
    status: StockStatus
    days_remaining: int
    value: float
    cost: float
    supplier: str
    location: str
    last_updated: str


class InventorySummary(CamelModel):
    total_products: int
    total_value: float
    total_cost: float
    critical_items: int
    low_stock_items: int
    healthy_items: int


class InventoryOverview(CamelModel):
    """Response data for GET /inventory/optimize."""

    products: list[InventoryItem]
    summary: InventorySummary


class OptimizeRequest(CamelModel):
    """Body of POST /inventory/optimize."""

    product_id: str | None = None
    current_stock: int | None = Field(default=None, ge=0)
    lead_time_days: int = Field(default=14, ge=1, le=365)
    horizon: int = Field(default=30, ge=1, le=365)


class OptimizationResult(CamelModel):
    """Replenishment recommendation for one product."""

    product_id: str
    product_name: str
    product_category: str
    current_stock: int
    lead_time_days: int
    horizon: int
    optimal_reorder_point: int
    optimal_safety_stock: int
    recommended_order_quantity: int
    waste_prediction: float
    carbon_footprint_reduction: float
    generated_at: str
