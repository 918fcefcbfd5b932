"""Core module - entities, stores, integrity coordinator and metrics."""

from agropecuario.core.coordinator import IntegrityCoordinator
from agropecuario.core.entities import Harvest, Product, ProductStatistics
from agropecuario.core.harvest_store import HarvestStore
from agropecuario.core.ids import EntityKind, IdGenerator
from agropecuario.core.outcome import (
    ErrorCategory,
    ErrorCode,
    Failure,
    FieldViolation,
    Outcome,
)
from agropecuario.core.product_store import ProductStore

__all__ = [
    "EntityKind",
    "ErrorCategory",
    "ErrorCode",
    "Failure",
    "FieldViolation",
    "Harvest",
    "HarvestStore",
    "IdGenerator",
    "IntegrityCoordinator",
    "Outcome",
    "Product",
    "ProductStatistics",
    "ProductStore",
]
