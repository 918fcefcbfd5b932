"""Harvest request/response schemas."""

from dataclasses import asdict
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agropecuario.core.clock import to_local
from agropecuario.core.entities import Harvest
from agropecuario.schemas.common import Timestamp


class HarvestPayload(BaseModel):
    """Incoming harvest body (create and full update)."""

    id: str | None = Field(default=None, description="Optional caller-chosen id")
    product_id: str | None = Field(default=None, alias="productoId")
    harvest_date: datetime | None = Field(default=None, alias="fechaCosecha")
    quantity: float | None = Field(default=None, alias="cantidadCosechada")
    quality: str | None = Field(default=None, alias="calidad")
    workers: int | None = Field(default=None, alias="trabajadores")
    harvest_cost: float | None = Field(default=None, alias="costoCosecha")
    weather: str | None = Field(default=None, alias="condicionesClimaticas")
    notes: str | None = Field(default=None, alias="observaciones")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_domain(self, timezone: str) -> Harvest:
        values = self.model_dump(exclude_none=True)
        if "harvest_date" in values:
            values["harvest_date"] = to_local(values["harvest_date"], timezone)
        return Harvest(**values)


class HarvestResponse(BaseModel):
    """Stored harvest."""

    id: str
    product_id: str = Field(alias="productoId")
    harvest_date: Timestamp = Field(alias="fechaCosecha")
    quantity: float = Field(alias="cantidadCosechada")
    quality: str = Field(alias="calidad")
    workers: int | None = Field(default=None, alias="trabajadores")
    harvest_cost: float | None = Field(default=None, alias="costoCosecha")
    weather: str | None = Field(default=None, alias="condicionesClimaticas")
    notes: str | None = Field(default=None, alias="observaciones")
    created_at: Timestamp | None = Field(default=None, alias="fechaRegistro")
    updated_at: Timestamp | None = Field(default=None, alias="fechaActualizacion")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, harvest: Harvest) -> "HarvestResponse":
        return cls(**asdict(harvest))
