"""Product request/response schemas.

Wire names follow the public Spanish contract (``hectareasCultivadas``);
attributes use the domain names.
"""

from dataclasses import asdict
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agropecuario.core import metrics
from agropecuario.core.clock import to_local
from agropecuario.core.entities import Product, ProductStatistics
from agropecuario.schemas.common import Timestamp


class ProductPayload(BaseModel):
    """Incoming product body (create and full update).

    Only types are enforced here; range and presence rules are applied by
    the coordinator so every violation is reported at once.
    """

    id: str | None = Field(default=None, description="Optional caller-chosen id")
    name: str | None = Field(default=None, alias="nombre")
    cultivated_hectares: float | None = Field(default=None, alias="hectareasCultivadas")
    produced_quantity: int | None = Field(default=None, alias="cantidadProducida")
    production_date: datetime | None = Field(default=None, alias="fechaProduccion")
    crop_type: str | None = Field(default=None, alias="tipoCultivo")
    sale_price: float | None = Field(default=None, alias="precioVenta")
    production_cost: float | None = Field(default=None, alias="costoProduccion")
    yield_per_hectare: float | None = Field(default=None, alias="rendimientoPorHa")
    season: str | None = Field(default=None, alias="temporada")
    soil_type: str | None = Field(default=None, alias="tipoSuelo")
    farm_code: str | None = Field(default=None, alias="codigoFinca")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_domain(self, timezone: str) -> Product:
        """Build a ``Product``; omitted fields fall back to entity defaults."""
        values = self.model_dump(exclude_none=True)
        if "production_date" in values:
            values["production_date"] = to_local(values["production_date"], timezone)
        return Product(**values)


class ProductResponse(BaseModel):
    """Stored product plus its derived metrics."""

    id: str
    name: str = Field(alias="nombre")
    cultivated_hectares: float = Field(alias="hectareasCultivadas")
    produced_quantity: int = Field(alias="cantidadProducida")
    production_date: Timestamp = Field(alias="fechaProduccion")
    crop_type: str = Field(alias="tipoCultivo")
    sale_price: float = Field(alias="precioVenta")
    production_cost: float = Field(alias="costoProduccion")
    yield_per_hectare: float | None = Field(default=None, alias="rendimientoPorHa")
    season: str = Field(alias="temporada")
    soil_type: str = Field(alias="tipoSuelo")
    farm_code: str | None = Field(default=None, alias="codigoFinca")
    created_at: Timestamp | None = Field(default=None, alias="fechaRegistro")
    updated_at: Timestamp | None = Field(default=None, alias="fechaActualizacion")

    # Derived, recomputed per response
    total_revenue: float = Field(alias="ingresoTotal")
    profitability: float = Field(alias="rentabilidad")
    profit_margin: float = Field(alias="margenGanancia")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            cultivated_hectares=product.cultivated_hectares,
            produced_quantity=product.produced_quantity,
            production_date=product.production_date,
            crop_type=product.crop_type,
            sale_price=product.sale_price,
            production_cost=product.production_cost,
            yield_per_hectare=product.yield_per_hectare,
            season=product.season,
            soil_type=product.soil_type,
            farm_code=product.farm_code,
            created_at=product.created_at,
            updated_at=product.updated_at,
            total_revenue=metrics.total_revenue(product),
            profitability=metrics.profitability(product),
            profit_margin=metrics.profit_margin(product),
        )


class ProductStatisticsResponse(BaseModel):
    """Harvest aggregate and metrics for one product."""

    product_id: str = Field(alias="productoId")
    product_name: str | None = Field(default=None, alias="nombre")
    harvest_count: int = Field(alias="totalCosechas")
    total_harvested_quantity: float = Field(alias="cantidadTotalCosechada")
    average_harvest_quantity: float = Field(alias="promedioCosecha")
    last_harvest_date: Timestamp | None = Field(default=None, alias="ultimaCosecha")
    total_revenue: float = Field(alias="ingresoTotal")
    profitability: float = Field(alias="rentabilidad")
    profit_margin: float = Field(alias="margenGanancia")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, stats: ProductStatistics) -> "ProductStatisticsResponse":
        return cls(**asdict(stats))
