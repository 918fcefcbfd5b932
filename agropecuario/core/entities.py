"""Product (master) and Harvest (detail) records.

Both are immutable: stores hand out the same instance to every reader and
build a new one with ``dataclasses.replace`` on every change.
"""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_SEASON = "All year"
DEFAULT_SOIL_TYPE = "Loam"

QUALITY_GRADES: tuple[str, ...] = ("Premium", "Primera", "Segunda", "Tercera")


@dataclass(frozen=True)
class Product:
    """Registered agricultural crop entry."""

    id: str | None = None
    name: str | None = None
    cultivated_hectares: float | None = None
    produced_quantity: int | None = None
    production_date: datetime | None = None
    crop_type: str | None = None
    sale_price: float | None = None
    production_cost: float | None = None
    yield_per_hectare: float | None = None
    season: str = DEFAULT_SEASON
    soil_type: str = DEFAULT_SOIL_TYPE
    farm_code: str | None = None

    # Maintained by the store
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        return (
            f"<Product(id='{self.id}', name='{self.name}', "
            f"crop_type='{self.crop_type}', hectares={self.cultivated_hectares})>"
        )


@dataclass(frozen=True)
class Harvest:
    """Harvest record tied to exactly one product."""

    id: str | None = None
    product_id: str | None = None
    harvest_date: datetime | None = None
    quantity: float | None = None
    quality: str | None = None
    workers: int | None = None
    harvest_cost: float | None = None
    weather: str | None = None
    notes: str | None = None

    # Maintained by the store
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        return (
            f"<Harvest(id='{self.id}', product_id='{self.product_id}', "
            f"quantity={self.quantity}, quality='{self.quality}')>"
        )


@dataclass(frozen=True)
class ProductStatistics:
    """Per-product aggregate over its harvests plus derived metrics."""

    product_id: str
    product_name: str | None
    harvest_count: int
    total_harvested_quantity: float
    average_harvest_quantity: float
    last_harvest_date: datetime | None
    total_revenue: float
    profitability: float
    profit_margin: float
