"""Seed data loader.

Populates a fresh coordinator with the demonstration products and harvests
from ``data/seed.yaml``. Records go through the regular coordinator
operations, so they are validated like any client input.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agropecuario.core.coordinator import IntegrityCoordinator
from agropecuario.infra.logging import get_logger
from agropecuario.schemas.harvest import HarvestPayload
from agropecuario.schemas.product import ProductPayload

logger = get_logger(__name__)

DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "seed.yaml"


class SeedDataError(ValueError):
    """Raised when the seed file is unreadable or a record is rejected."""


@dataclass(frozen=True)
class SeedSummary:
    """How many records were loaded."""

    products: int
    harvests: int


def load_seed_file(path: Path | str | None = None) -> dict[str, list[dict[str, Any]]]:
    """Read and parse a seed YAML file.

    Raises:
        SeedDataError: If the file is missing or not a mapping
    """
    seed_path = Path(path) if path else DEFAULT_SEED_PATH
    if not seed_path.exists():
        raise SeedDataError(f"Seed file not found: {seed_path}")

    data = yaml.safe_load(seed_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise SeedDataError(f"Seed file must contain a mapping: {seed_path}")

    return {
        "products": data.get("products") or [],
        "harvests": data.get("harvests") or [],
    }


def seed_coordinator(
    coordinator: IntegrityCoordinator,
    timezone: str,
    path: Path | str | None = None,
) -> SeedSummary:
    """Create every seed product, then every seed harvest.

    Fails fast on the first rejected record.

    Raises:
        SeedDataError: If a record cannot be parsed or is rejected
    """
    data = load_seed_file(path)

    for record in data["products"]:
        try:
            product = ProductPayload.model_validate(record).to_domain(timezone)
        except ValidationError as e:
            raise SeedDataError(f"Invalid seed product {record.get('id')}: {e}") from e

        outcome = coordinator.create_product(product)
        if not outcome.ok:
            raise SeedDataError(
                f"Seed product {record.get('id')} rejected: {outcome.failure.message}"
            )

    for record in data["harvests"]:
        try:
            harvest = HarvestPayload.model_validate(record).to_domain(timezone)
        except ValidationError as e:
            raise SeedDataError(f"Invalid seed harvest {record.get('id')}: {e}") from e

        outcome = coordinator.create_harvest(harvest)
        if not outcome.ok:
            raise SeedDataError(
                f"Seed harvest {record.get('id')} rejected: {outcome.failure.message}"
            )

    summary = SeedSummary(products=len(data["products"]), harvests=len(data["harvests"]))
    logger.info("Seed data loaded", products=summary.products, harvests=summary.harvests)
    return summary
