"""Health check endpoints.

Provides health status for container probes and monitoring.
"""

from fastapi import APIRouter

from agropecuario import __version__
from agropecuario.api.deps import CoordinatorDep, SettingsDep
from agropecuario.infra.logging import get_logger
from agropecuario.schemas.common import HealthResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health(settings: SettingsDep) -> HealthResponse:
    """Basic health check.

    Returns 200 if service is running.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={},
    )


@router.get("/health/ready", response_model=HealthResponse)
async def health_ready(coordinator: CoordinatorDep, settings: SettingsDep) -> HealthResponse:
    """Readiness check.

    Verifies the stores answer and, when seeding is enabled, hold data.
    """
    checks: dict[str, bool] = {}

    try:
        product_count = coordinator.count_products()
        checks["stores"] = True
        if settings.seed_on_startup:
            checks["seed_data"] = product_count > 0
    except Exception as e:
        logger.warning("Store health check failed", error=str(e))
        checks["stores"] = False

    all_healthy = all(checks.values()) if checks else True

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        environment=settings.environment,
        checks=checks,
    )


@router.get("/health/live", response_model=HealthResponse)
async def health_live(settings: SettingsDep) -> HealthResponse:
    """Liveness check.

    Basic check that service is responding.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.environment,
        checks={"alive": True},
    )
