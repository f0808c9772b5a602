"""ABC analysis API schemas."""

from intellecty.domain.enums import AbcClass, Vertical
from intellecty.schemas.common import CamelModel


class AbcProduct(CamelModel):
    """A product with its inventory value and ABC class."""

    id: str
    name: str
    sku: str
    category: str
    vertical: Vertical
    quantity: int
    price: float
    value: float
    cost: float
    abc_class: AbcClass
    cumulative_percentage: float


class AbcRecommendation(CamelModel):
    category: AbcClass
    title: str
    description: str
    impact: str
    priority: str


class AbcCategory(CamelModel):
    products: list[AbcProduct]
    count: int
    percentage: float
    total_value: float
    recommendations: list[AbcRecommendation]


class AbcSummary(CamelModel):
    total_products: int
    total_value: float
    total_cost: float
    category_a_percentage: float
    category_b_percentage: float
    category_c_percentage: float


class AbcReport(CamelModel):
    """Response data for GET /analytics/abc-analysis."""

    analysis: AbcSummary
    categories: dict[AbcClass, AbcCategory]
    insights: list[str]
    generated_at: str
