"""Translation of core failures into HTTP error responses."""

from datetime import datetime
from typing import TypeVar

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agropecuario.core.outcome import ErrorCategory, ErrorCode, Failure, FieldViolation, Outcome
from agropecuario.schemas.common import ErrorDetail, ErrorResponse

T = TypeVar("T")

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCategory.REFERENTIAL_INTEGRITY_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorCategory.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """A failed outcome on its way to the exception handler.

    Attributes:
        failure: The core failure
        aliases: Attribute name -> wire name, used to report violations
    """

    def __init__(self, failure: Failure, aliases: dict[str, str] | None = None) -> None:
        super().__init__(failure.message)
        self.failure = failure
        self.aliases = aliases or {}

    @property
    def status_code(self) -> int:
        return STATUS_BY_CATEGORY[self.failure.category]


def unwrap(outcome: Outcome[T], aliases: dict[str, str] | None = None) -> T:
    """Return the outcome value or raise ``ApiError`` for the handler."""
    if outcome.failure is not None:
        raise ApiError(outcome.failure, aliases)
    return outcome.value  # type: ignore[return-value]


def error_body(
    failure: Failure,
    timestamp: datetime,
    aliases: dict[str, str] | None = None,
) -> ErrorResponse:
    aliases = aliases or {}
    return ErrorResponse(
        message=failure.message,
        error_code=failure.code.value,
        category=failure.category.value,
        details=[
            ErrorDetail(field=aliases.get(v.field, v.field), message=v.message)
            for v in failure.violations
        ],
        timestamp=timestamp,
    )


def render_error(
    failure: Failure,
    timestamp: datetime,
    aliases: dict[str, str] | None = None,
) -> JSONResponse:
    body = error_body(failure, timestamp, aliases)
    return JSONResponse(
        status_code=STATUS_BY_CATEGORY[failure.category],
        content=body.model_dump(mode="json", by_alias=True),
    )


def request_validation_failure(exc: RequestValidationError) -> Failure:
    """Describe a pydantic request error as a validation failure.

    Locations are reported by their wire name (``hectareasCultivadas``).
    """
    violations = []
    for error in exc.errors():
        location = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "query", "path")
        ]
        violations.append(
            FieldViolation(".".join(location) or "body", error.get("msg", "Valor inválido"))
        )

    return Failure(
        category=ErrorCategory.VALIDATION_ERROR,
        code=ErrorCode.INVALID_FIELDS,
        message="La solicitud contiene datos inválidos",
        violations=tuple(violations),
    )
