"""Explicit field validation for products and harvests.

Each validator returns every violation it finds (empty list means valid).
The coordinator calls them before touching a store.
"""

from agropecuario.core.entities import QUALITY_GRADES, Harvest, Product
from agropecuario.core.outcome import FieldViolation

ID_MIN_LENGTH = 3
ID_MAX_LENGTH = 10

PRODUCT_NAME_MIN_LENGTH = 2
PRODUCT_NAME_MAX_LENGTH = 100
HECTARES_MIN = 0.1
HECTARES_MAX = 10_000.0
PRODUCED_QUANTITY_MIN = 1
PRODUCED_QUANTITY_MAX = 1_000_000
SALE_PRICE_MIN = 100.0
SALE_PRICE_MAX = 1_000_000.0
PRODUCTION_COST_MIN = 100.0

HARVEST_QUANTITY_MAX = 1_000_000.0
WEATHER_MAX_LENGTH = 100
NOTES_MAX_LENGTH = 500


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_id(identifier: str | None, violations: list[FieldViolation]) -> None:
    if identifier is None:
        return
    if not ID_MIN_LENGTH <= len(identifier.strip()) <= ID_MAX_LENGTH:
        violations.append(
            FieldViolation(
                "id",
                f"El ID debe tener entre {ID_MIN_LENGTH} y {ID_MAX_LENGTH} caracteres",
            )
        )


def validate_product(product: Product) -> list[FieldViolation]:
    """Check a product against its field constraints."""
    violations: list[FieldViolation] = []

    _check_id(product.id, violations)

    if _is_blank(product.name):
        violations.append(FieldViolation("name", "El nombre es obligatorio"))
    elif not PRODUCT_NAME_MIN_LENGTH <= len(product.name.strip()) <= PRODUCT_NAME_MAX_LENGTH:
        violations.append(
            FieldViolation(
                "name",
                f"El nombre debe tener entre {PRODUCT_NAME_MIN_LENGTH} "
                f"y {PRODUCT_NAME_MAX_LENGTH} caracteres",
            )
        )

    if product.cultivated_hectares is None:
        violations.append(
            FieldViolation("cultivated_hectares", "Las hectáreas cultivadas son obligatorias")
        )
    elif product.cultivated_hectares < HECTARES_MIN:
        violations.append(
            FieldViolation("cultivated_hectares", f"Las hectáreas deben ser mayor a {HECTARES_MIN}")
        )
    elif product.cultivated_hectares > HECTARES_MAX:
        violations.append(
            FieldViolation("cultivated_hectares", "Las hectáreas no pueden exceder 10,000")
        )

    if product.produced_quantity is None:
        violations.append(
            FieldViolation("produced_quantity", "La cantidad producida es obligatoria")
        )
    elif product.produced_quantity < PRODUCED_QUANTITY_MIN:
        violations.append(
            FieldViolation("produced_quantity", "La cantidad producida debe ser mayor a 0")
        )
    elif product.produced_quantity > PRODUCED_QUANTITY_MAX:
        violations.append(
            FieldViolation("produced_quantity", "La cantidad producida no puede exceder 1,000,000")
        )

    if product.production_date is None:
        violations.append(
            FieldViolation("production_date", "La fecha de producción es obligatoria")
        )

    if _is_blank(product.crop_type):
        violations.append(FieldViolation("crop_type", "El tipo de cultivo es obligatorio"))

    if product.sale_price is None:
        violations.append(FieldViolation("sale_price", "El precio de venta es obligatorio"))
    elif product.sale_price < SALE_PRICE_MIN:
        violations.append(FieldViolation("sale_price", "El precio debe ser mayor a $100"))
    elif product.sale_price > SALE_PRICE_MAX:
        violations.append(FieldViolation("sale_price", "El precio no puede exceder $1,000,000"))

    if product.production_cost is None:
        violations.append(
            FieldViolation("production_cost", "El costo de producción es obligatorio")
        )
    elif product.production_cost < PRODUCTION_COST_MIN:
        violations.append(FieldViolation("production_cost", "El costo debe ser mayor a $100"))

    if product.yield_per_hectare is not None and product.yield_per_hectare < 0:
        violations.append(
            FieldViolation("yield_per_hectare", "El rendimiento por hectárea no puede ser negativo")
        )

    if _is_blank(product.season):
        violations.append(FieldViolation("season", "La temporada no puede estar vacía"))

    if _is_blank(product.soil_type):
        violations.append(FieldViolation("soil_type", "El tipo de suelo no puede estar vacío"))

    return violations


def validate_harvest(harvest: Harvest) -> list[FieldViolation]:
    """Check a harvest against its field constraints.

    Only the shape of ``product_id`` is checked here; whether it resolves to
    a product is the coordinator's job.
    """
    violations: list[FieldViolation] = []

    _check_id(harvest.id, violations)

    if _is_blank(harvest.product_id):
        violations.append(FieldViolation("product_id", "El ID del producto es obligatorio"))

    if harvest.harvest_date is None:
        violations.append(FieldViolation("harvest_date", "La fecha de cosecha es obligatoria"))

    if harvest.quantity is None:
        violations.append(FieldViolation("quantity", "La cantidad cosechada es obligatoria"))
    elif harvest.quantity <= 0:
        violations.append(FieldViolation("quantity", "La cantidad cosechada debe ser mayor a 0"))
    elif harvest.quantity > HARVEST_QUANTITY_MAX:
        violations.append(
            FieldViolation("quantity", "La cantidad cosechada no puede exceder 1,000,000")
        )

    if _is_blank(harvest.quality):
        violations.append(FieldViolation("quality", "La calidad es obligatoria"))
    elif harvest.quality not in QUALITY_GRADES:
        violations.append(
            FieldViolation("quality", f"La calidad debe ser una de: {', '.join(QUALITY_GRADES)}")
        )

    if harvest.workers is not None and harvest.workers < 1:
        violations.append(FieldViolation("workers", "Debe haber al menos un trabajador"))

    if harvest.harvest_cost is not None and harvest.harvest_cost < 0:
        violations.append(FieldViolation("harvest_cost", "El costo de cosecha no puede ser negativo"))

    if harvest.weather is not None and len(harvest.weather) > WEATHER_MAX_LENGTH:
        violations.append(
            FieldViolation(
                "weather",
                f"Las condiciones climáticas no pueden exceder {WEATHER_MAX_LENGTH} caracteres",
            )
        )

    if harvest.notes is not None and len(harvest.notes) > NOTES_MAX_LENGTH:
        violations.append(
            FieldViolation(
                "notes",
                f"Las observaciones no pueden exceder {NOTES_MAX_LENGTH} caracteres",
            )
        )

    return violations
