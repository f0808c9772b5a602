"""Product entity and the demo catalog served by the dashboards."""

from __future__ import annotations

from dataclasses import dataclass

from intellecty.domain.enums import Vertical


@dataclass(frozen=True)
class Product:
    """A stocked product (SKU) with its replenishment parameters."""

    id: str
    name: str
    category: str
    sku: str
    price: float
    cost: float
    current_stock: int
    reorder_point: int
    safety_stock: int
    lead_time: int
    supplier: str
    location: str
    vertical: Vertical

    @property
    def stock_value(self) -> float:
        return self.current_stock * self.price

    @property
    def stock_cost(self) -> float:
        return self.current_stock * self.cost


def _industrial(*args: object) -> Product:
    return Product(*args, vertical=Vertical.INDUSTRIAL)  # type: ignore[arg-type]


def _apparel(*args: object) -> Product:
    return Product(*args, vertical=Vertical.APPAREL)  # type: ignore[arg-type]


INDUSTRIAL_PRODUCTS: tuple[Product, ...] = (
    _industrial("IND-001", "SKF 6205 Deep Groove Ball Bearing", "Bearings", "SKF-6205-2RS",
                45.50, 28.75, 125, 50, 25, 14, "SKF Bearings Ltd", "Warehouse A"),
    _industrial("IND-002", "Mechanical Seal Type A - Carbon/Silicon Carbide", "Seals", "MS-A-CSC-50",
                125.00, 78.50, 45, 20, 10, 21, "John Crane Inc", "Warehouse B"),
    _industrial("IND-003", "Hydraulic Cylinder Seal Kit", "Hydraulics", "HC-SK-80-200",
                89.99, 52.30, 78, 30, 15, 10, "Parker Hannifin", "Warehouse A"),
    _industrial("IND-004", "Industrial Chain 16B-1", "Chains & Sprockets", "CH-16B-1-100",
                156.75, 95.20, 32, 15, 8, 28, "Tsubaki Chain", "Warehouse C"),
    _industrial("IND-005", "V-Belt A-65", "Belts & Pulleys", "VB-A-65",
                12.50, 7.80, 200, 100, 50, 7, "Gates Corporation", "Warehouse A"),
    _industrial("IND-006", "Industrial Lubricant - ISO VG 68", "Lubricants", "LUB-ISO68-20L",
                89.99, 55.60, 15, 8, 4, 14, "Shell Lubricants", "Warehouse B"),
    _industrial("IND-007", "Steel Wire Rope 6x19 IWRC", "Wire Rope", "WR-6x19-12mm-100m",
                245.00, 165.75, 8, 5, 2, 21, "Wire Rope Industries", "Warehouse C"),
    _industrial("IND-008", "Industrial Filter Element", "Filtration", "FE-HYD-10MIC",
                35.75, 22.40, 95, 40, 20, 10, "Pall Corporation", "Warehouse A"),
)

APPAREL_PRODUCTS: tuple[Product, ...] = (
    _apparel("APP-001", "Classic Cotton T-Shirt - Summer Collection", "T-Shirts", "TSH-COT-SUM-M",
             24.99, 12.50, 150, 75, 30, 14, "Cotton Mills International", "Fashion Warehouse"),
    _apparel("APP-002", "Denim Jeans - Classic Fit", "Jeans", "JNS-DEN-CLF-32",
             89.99, 45.00, 85, 40, 20, 21, "Denim Works Ltd", "Fashion Warehouse"),
    _apparel("APP-003", "Wool Blend Sweater - Winter Collection", "Sweaters", "SWT-WOL-WIN-L",
             129.99, 65.00, 45, 25, 12, 28, "Wool Textiles Co", "Fashion Warehouse"),
    _apparel("APP-004", "Running Shoes - Athletic Collection", "Footwear", "SHO-RUN-ATH-9",
             149.99, 75.00, 60, 30, 15, 35, "Athletic Footwear Inc", "Fashion Warehouse"),
    _apparel("APP-005", "Leather Handbag - Premium Collection", "Accessories", "BAG-LEA-PRM-ONE",
             199.99, 100.00, 25, 12, 6, 42, "Leather Crafts Ltd", "Fashion Warehouse"),
    _apparel("APP-006", "Silk Scarf - Luxury Collection", "Accessories", "SCF-SIL-LUX-ONE",
             79.99, 40.00, 80, 40, 20, 21, "Silk Textiles International", "Fashion Warehouse"),
    _apparel("APP-007", "Casual Dress - Spring Collection", "Dresses", "DRS-CAS-SPR-M",
             69.99, 35.00, 55, 28, 14, 21, "Fashion Forward Ltd", "Fashion Warehouse"),
    _apparel("APP-008", "Baseball Cap - Sports Collection", "Accessories", "CAP-BSB-SPT-ONE",
             19.99, 10.00, 200, 100, 50, 14, "Sports Accessories Co", "Fashion Warehouse"),
)

ALL_PRODUCTS: tuple[Product, ...] = INDUSTRIAL_PRODUCTS + APPAREL_PRODUCTS


def find_product(product_id: str) -> Product | None:
    """Return the catalog product with product_id, or None."""
    return next((p for p in ALL_PRODUCTS if p.id == product_id), None)


def filter_products(
    vertical: str | None = None,
    category: str | None = None,
) -> list[Product]:
    """Filter the catalog by vertical (case-insensitive exact) and category substring."""
    products = list(ALL_PRODUCTS)
    if vertical:
        products = [p for p in products if p.vertical.value == vertical.upper()]
    if category:
        needle = category.lower()
        products = [p for p in products if needle in p.category.lower()]
    return products
