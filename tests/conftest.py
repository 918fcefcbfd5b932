"""Shared fixtures: fixed clock, fresh stores, seeded coordinator, API client."""

from collections.abc import AsyncIterator, Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agropecuario.config import Settings
from agropecuario.core.coordinator import IntegrityCoordinator
from agropecuario.core.entities import Harvest, Product
from agropecuario.core.harvest_store import HarvestStore
from agropecuario.core.ids import IdGenerator
from agropecuario.core.product_store import ProductStore
from agropecuario.main import create_app
from agropecuario.seed import seed_coordinator

FIXED_NOW = datetime(2025, 1, 15, 10, 30, 0)


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def id_generator() -> IdGenerator:
    return IdGenerator()


@pytest.fixture
def product_store(id_generator: IdGenerator, clock) -> ProductStore:
    return ProductStore(id_generator, clock)


@pytest.fixture
def harvest_store(id_generator: IdGenerator, clock) -> HarvestStore:
    return HarvestStore(id_generator, clock)


@pytest.fixture
def coordinator(
    product_store: ProductStore,
    harvest_store: HarvestStore,
    clock,
) -> IntegrityCoordinator:
    """Coordinator over empty stores."""
    return IntegrityCoordinator(product_store, harvest_store, clock)


@pytest.fixture
def seeded(coordinator: IntegrityCoordinator) -> IntegrityCoordinator:
    """Coordinator holding the packaged seed data (AGR001-003, COS001-005)."""
    seed_coordinator(coordinator, "America/Bogota")
    return coordinator


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for valid products; keyword overrides replace fields."""

    def factory(**overrides: Any) -> Product:
        base = Product(
            name="Cacao Fino",
            cultivated_hectares=7.5,
            produced_quantity=2000,
            production_date=datetime(2024, 11, 1, 8, 0, 0),
            crop_type="Cacao",
            sale_price=9000.0,
            production_cost=3500.0,
        )
        return replace(base, **overrides)

    return factory


@pytest.fixture
def make_harvest() -> Callable[..., Harvest]:
    """Factory for valid harvests; ``product_id`` defaults to AGR001."""

    def factory(**overrides: Any) -> Harvest:
        base = Harvest(
            product_id="AGR001",
            harvest_date=datetime(2024, 12, 1, 6, 0, 0),
            quantity=300.0,
            quality="Primera",
            workers=5,
        )
        return replace(base, **overrides)

    return factory


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="dev",
        log_json=False,
        log_level="WARNING",
        seed_on_startup=True,
    )


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def product_body() -> dict[str, Any]:
    """Valid product request body using wire names."""
    return {
        "nombre": "Plátano Hartón",
        "hectareasCultivadas": 12.0,
        "cantidadProducida": 4000,
        "fechaProduccion": "2024-10-01T07:00:00",
        "tipoCultivo": "Fruta",
        "precioVenta": 1800.0,
        "costoProduccion": 900.0,
        "temporada": "Rainy",
    }


@pytest.fixture
def harvest_body() -> dict[str, Any]:
    """Valid harvest request body (no product id)."""
    return {
        "fechaCosecha": "2024-12-10T06:00:00",
        "cantidadCosechada": 250.0,
        "calidad": "Premium",
        "trabajadores": 4,
    }
