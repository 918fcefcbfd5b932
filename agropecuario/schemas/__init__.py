"""Pydantic schemas for request/response validation."""

from agropecuario.schemas.common import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    SystemStatisticsResponse,
    field_aliases,
)
from agropecuario.schemas.harvest import HarvestPayload, HarvestResponse
from agropecuario.schemas.product import (
    ProductPayload,
    ProductResponse,
    ProductStatisticsResponse,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "SystemStatisticsResponse",
    "field_aliases",
    "HarvestPayload",
    "HarvestResponse",
    "ProductPayload",
    "ProductResponse",
    "ProductStatisticsResponse",
]
