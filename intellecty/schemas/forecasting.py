"""Demand forecasting API schemas."""

from pydantic import Field

from intellecty.domain.enums import Vertical
from intellecty.schemas.common import CamelModel
from intellecty.schemas.external import EconomicData, EconomicImpact


class ForecastRequest(CamelModel):
    """Body of POST /forecasting/generate. Unknown fields are ignored."""

    product_id: str | None = None
    horizon: int = Field(30, ge=1, le=365)
    include_external_factors: bool = True


class ForecastPoint(CamelModel):
    date: str
    quantity: int
    confidence: float
    model_type: str
    factors: list[str] = Field(default_factory=list)
    confidence_interval: tuple[float, float]


class ExternalFactors(CamelModel):
    economic: EconomicData
    economic_impact: EconomicImpact


class ForecastResult(CamelModel):
    """Response data for POST /forecasting/generate."""

    product_id: str
    product_name: str
    product_category: str
    product_vertical: Vertical
    forecast: list[ForecastPoint]
    generated_at: str
    horizon: int
    model_type: str
    accuracy: float
    mape: float
    insights: list[str]
    external_factors: ExternalFactors | None = None


class ProductRef(CamelModel):
    id: str
    name: str
    sku: str
    category: str
    vertical: Vertical
    current_stock: int
    reorder_point: int


class ForecastSummary(CamelModel):
    """One entry of GET /forecasting/generate (forecast history)."""

    id: str
    product_id: str
    date: str
    horizon: int
    quantity: int
    confidence: float
    model_type: str
    model_version: str
    accuracy: float
    mape: float
    product: ProductRef
