"""FastAPI application entry point.

Agricultural products and harvests REST API backed by in-memory stores.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agropecuario import __version__
from agropecuario.api.errors import ApiError, render_error, request_validation_failure
from agropecuario.api.routes import (
    harvests_router,
    health_router,
    product_harvests_router,
    products_router,
)
from agropecuario.config import Settings, get_settings
from agropecuario.core.clock import Clock, regional_clock
from agropecuario.core.coordinator import IntegrityCoordinator
from agropecuario.core.harvest_store import HarvestStore
from agropecuario.core.ids import IdGenerator
from agropecuario.core.outcome import internal_error
from agropecuario.core.product_store import ProductStore
from agropecuario.infra.logging import get_logger, setup_logging
from agropecuario.seed import seed_coordinator

logger = get_logger(__name__)


def build_coordinator(clock: Clock) -> IntegrityCoordinator:
    """Wire one id generator, both stores and the coordinator over them."""
    ids = IdGenerator()
    return IntegrityCoordinator(
        products=ProductStore(ids, clock),
        harvests=HarvestStore(ids, clock),
        clock=clock,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler (logging only; state is wired in create_app)."""
    settings: Settings = app.state.settings
    logger.info(
        "Agropecuario API starting",
        environment=settings.environment,
        products=app.state.coordinator.count_products(),
        harvests=app.state.coordinator.count_harvests(),
    )

    yield

    logger.info("Agropecuario API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with freshly wired, optionally seeded stores.

    Raises:
        SeedDataError: If seeding is enabled and the seed data is rejected
    """
    settings = settings or get_settings()
    setup_logging(settings)

    clock = regional_clock(settings.timezone)
    coordinator = build_coordinator(clock)
    if settings.seed_on_startup:
        seed_coordinator(coordinator, settings.timezone, settings.seed_path)

    app = FastAPI(
        title="API REST Agropecuario",
        description="Agricultural products and their harvests",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment == "dev" else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.coordinator = coordinator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router, tags=["Productos"])
    app.include_router(product_harvests_router, tags=["Cosechas por producto"])
    app.include_router(harvests_router, tags=["Cosechas"])

    @app.get("/")
    async def root() -> dict:
        """Root endpoint - basic service info."""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "environment": settings.environment,
        }

    return app


# =============================================================================
# Exception Handlers
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        """Render a failed core outcome."""
        logger.info(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error_code=exc.failure.code.value,
            status_code=exc.status_code,
        )
        return render_error(exc.failure, request.app.state.clock(), exc.aliases)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed request bodies and parameters as 400."""
        failure = request_validation_failure(exc)
        logger.info(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            fields=[v.field for v in failure.violations],
        )
        return render_error(failure, request.app.state.clock())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return render_error(
            internal_error(f"Error interno del servidor: {type(exc).__name__}"),
            request.app.state.clock(),
        )


app = create_app()
