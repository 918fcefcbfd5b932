"""Direct harvest endpoints under /api/cosechas (no product scoping)."""

from fastapi import APIRouter, Query, status

from agropecuario.api.deps import ClockDep, CoordinatorDep, SettingsDep
from agropecuario.api.errors import ApiError, unwrap
from agropecuario.core.outcome import invalid_query
from agropecuario.schemas.common import ApiResponse, field_aliases
from agropecuario.schemas.harvest import HarvestPayload, HarvestResponse

router = APIRouter(prefix="/api/cosechas")

HARVEST_ALIASES = field_aliases(HarvestPayload)


@router.get("", response_model=ApiResponse[list[HarvestResponse]])
async def list_harvests(
    coordinator: CoordinatorDep,
    clock: ClockDep,
    producto_id: str | None = Query(default=None, alias="productoId"),
    calidad: str | None = Query(default=None, description="Quality grade"),
) -> ApiResponse[list[HarvestResponse]]:
    """List harvests, optionally by product id or by quality grade."""
    if producto_id is not None and calidad is not None:
        raise ApiError(invalid_query("Solo se permite un filtro a la vez: productoId, calidad"))

    if producto_id is not None:
        harvests = coordinator.find_harvests_by_product(producto_id)
        message = f"Se encontraron {len(harvests)} cosechas del producto {producto_id}"
    elif calidad is not None:
        harvests = coordinator.find_harvests_by_quality(calidad)
        message = f"Se encontraron {len(harvests)} cosechas de calidad '{calidad}'"
    else:
        harvests = coordinator.list_harvests()
        message = "Cosechas obtenidas exitosamente"

    return ApiResponse(
        message=message,
        data=[HarvestResponse.from_domain(h) for h in harvests],
        timestamp=clock(),
    )


@router.get("/{harvest_id}", response_model=ApiResponse[HarvestResponse])
async def get_harvest(
    harvest_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[HarvestResponse]:
    harvest = unwrap(coordinator.get_harvest(harvest_id))
    return ApiResponse(
        message="Cosecha encontrada",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.post(
    "",
    response_model=ApiResponse[HarvestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_harvest(
    payload: HarvestPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[HarvestResponse]:
    """Create a harvest; ``productoId`` must name an existing product (else 409)."""
    harvest = unwrap(
        coordinator.create_harvest(payload.to_domain(settings.timezone)),
        HARVEST_ALIASES,
    )
    return ApiResponse(
        message="Cosecha creada exitosamente",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.put("/{harvest_id}", response_model=ApiResponse[HarvestResponse])
async def update_harvest(
    harvest_id: str,
    payload: HarvestPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[HarvestResponse]:
    harvest = unwrap(
        coordinator.update_harvest(harvest_id, payload.to_domain(settings.timezone)),
        HARVEST_ALIASES,
    )
    return ApiResponse(
        message="Cosecha actualizada exitosamente",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.delete("/{harvest_id}", response_model=ApiResponse[None])
async def delete_harvest(
    harvest_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[None]:
    unwrap(coordinator.delete_harvest(harvest_id))
    return ApiResponse(message="Cosecha eliminada exitosamente", data=None, timestamp=clock())
