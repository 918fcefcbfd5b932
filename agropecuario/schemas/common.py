"""Common schemas for API responses."""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from agropecuario.core.clock import format_timestamp

T = TypeVar("T")

# Rendered as yyyy-MM-ddTHH:mm:ss on the wire
Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str, when_used="json")]


def field_aliases(model: type[BaseModel]) -> dict[str, str]:
    """Map attribute names of ``model`` to their wire aliases."""
    return {
        name: info.alias or name
        for name, info in model.model_fields.items()
    }


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    message: str = Field(description="Human-readable summary")
    data: T | None = Field(default=None, description="Response payload")
    timestamp: Timestamp = Field(description="Server time when the response was built")


class ErrorDetail(BaseModel):
    """One offending field in a rejected request."""

    field: str = Field(alias="campo")
    message: str = Field(alias="mensaje")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Envelope wrapping every error response."""

    success: bool = Field(default=False)
    message: str = Field(description="Error message")
    error_code: str = Field(alias="errorCode", description="Specific error code")
    category: str = Field(description="Error category")
    details: list[ErrorDetail] = Field(default_factory=list, description="Field violations")
    timestamp: Timestamp

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Health status (healthy, degraded)")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual health checks")

    model_config = {"extra": "forbid"}


class SystemStatisticsResponse(BaseModel):
    """Service-wide counters and identity."""

    total_products: int = Field(alias="totalProductos")
    total_harvests: int = Field(alias="totalCosechas")
    server: str = Field(alias="servidor")
    version: str
    timestamp: Timestamp

    model_config = ConfigDict(populate_by_name=True)
