"""Tagged operation outcomes and the error taxonomy.

Store and coordinator operations return an ``Outcome`` instead of raising:
either a value, or a ``Failure`` describing what went wrong. Callers decide
how to render a failure (the HTTP layer maps categories to status codes).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(str, Enum):
    """Broad failure categories."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    REFERENTIAL_INTEGRITY_VIOLATION = "REFERENTIAL_INTEGRITY_VIOLATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorCode(str, Enum):
    """Specific failure reasons."""

    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    HARVEST_NOT_FOUND = "HARVEST_NOT_FOUND"
    PRODUCT_ALREADY_EXISTS = "PRODUCT_ALREADY_EXISTS"
    HARVEST_ALREADY_EXISTS = "HARVEST_ALREADY_EXISTS"
    PRODUCT_HAS_HARVESTS = "PRODUCT_HAS_HARVESTS"
    HARVEST_NOT_BELONGING_TO_PRODUCT = "HARVEST_NOT_BELONGING_TO_PRODUCT"
    INVALID_FIELDS = "INVALID_FIELDS"
    INVALID_QUERY = "INVALID_QUERY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FieldViolation:
    """A single field constraint violation.

    Attributes:
        field: Attribute name on the entity (``cultivated_hectares``)
        message: Human-readable description
    """

    field: str
    message: str


@dataclass(frozen=True)
class Failure:
    """Why an operation did not succeed."""

    category: ErrorCategory
    code: ErrorCode
    message: str
    violations: tuple[FieldViolation, ...] = ()


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value or failure, never both."""

    value: T | None = None
    failure: Failure | None = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """Return the value of a successful outcome.

        Raises:
            ValueError: If the outcome is a failure
        """
        if self.failure is not None:
            raise ValueError(f"Outcome failed: {self.failure.code.value}: {self.failure.message}")
        return self.value  # type: ignore[return-value]


# =============================================================================
# Failure factories
# =============================================================================


def product_not_found(
    product_id: str,
    category: ErrorCategory = ErrorCategory.NOT_FOUND,
) -> Failure:
    return Failure(
        category=category,
        code=ErrorCode.PRODUCT_NOT_FOUND,
        message=f"Producto no encontrado con ID: {product_id}",
    )


def unresolved_product_reference(product_id: str) -> Failure:
    """A harvest points at a product that does not exist."""
    return product_not_found(product_id, ErrorCategory.REFERENTIAL_INTEGRITY_VIOLATION)


def harvest_not_found(harvest_id: str) -> Failure:
    return Failure(
        category=ErrorCategory.NOT_FOUND,
        code=ErrorCode.HARVEST_NOT_FOUND,
        message=f"Cosecha no encontrada con ID: {harvest_id}",
    )


def product_already_exists(product_id: str) -> Failure:
    return Failure(
        category=ErrorCategory.ALREADY_EXISTS,
        code=ErrorCode.PRODUCT_ALREADY_EXISTS,
        message=f"Ya existe un producto con ID: {product_id}",
    )


def harvest_already_exists(harvest_id: str) -> Failure:
    return Failure(
        category=ErrorCategory.ALREADY_EXISTS,
        code=ErrorCode.HARVEST_ALREADY_EXISTS,
        message=f"Ya existe una cosecha con ID: {harvest_id}",
    )


def product_has_harvests(product_id: str, harvest_count: int) -> Failure:
    return Failure(
        category=ErrorCategory.REFERENTIAL_INTEGRITY_VIOLATION,
        code=ErrorCode.PRODUCT_HAS_HARVESTS,
        message=(
            f"No se puede eliminar el producto {product_id}: "
            f"tiene {harvest_count} cosecha(s) asociada(s)"
        ),
    )


def harvest_not_belonging_to_product(harvest_id: str, product_id: str) -> Failure:
    return Failure(
        category=ErrorCategory.REFERENTIAL_INTEGRITY_VIOLATION,
        code=ErrorCode.HARVEST_NOT_BELONGING_TO_PRODUCT,
        message=f"La cosecha {harvest_id} no pertenece al producto {product_id}",
    )


def invalid_fields(entity: str, violations: list[FieldViolation]) -> Failure:
    return Failure(
        category=ErrorCategory.VALIDATION_ERROR,
        code=ErrorCode.INVALID_FIELDS,
        message=f"Datos de {entity} inválidos",
        violations=tuple(violations),
    )


def invalid_query(message: str) -> Failure:
    return Failure(
        category=ErrorCategory.VALIDATION_ERROR,
        code=ErrorCode.INVALID_QUERY,
        message=message,
    )


def internal_error(message: str) -> Failure:
    return Failure(
        category=ErrorCategory.INTERNAL_ERROR,
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
    )
