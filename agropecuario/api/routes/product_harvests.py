"""Harvests scoped to a product, under /api/productos/{product_id}/cosechas.

Every route checks that the product exists and that the harvest belongs to
it; guessing another product's harvest id yields 409, never the harvest.
"""

from fastapi import APIRouter, status

from agropecuario.api.deps import ClockDep, CoordinatorDep, SettingsDep
from agropecuario.api.errors import unwrap
from agropecuario.schemas.common import ApiResponse, field_aliases
from agropecuario.schemas.harvest import HarvestPayload, HarvestResponse

router = APIRouter(prefix="/api/productos/{product_id}/cosechas")

HARVEST_ALIASES = field_aliases(HarvestPayload)


@router.get("", response_model=ApiResponse[list[HarvestResponse]])
async def list_product_harvests(
    product_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[list[HarvestResponse]]:
    harvests = unwrap(coordinator.list_harvests_for_product(product_id))
    return ApiResponse(
        message=f"Se encontraron {len(harvests)} cosechas del producto {product_id}",
        data=[HarvestResponse.from_domain(h) for h in harvests],
        timestamp=clock(),
    )


@router.post(
    "",
    response_model=ApiResponse[HarvestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product_harvest(
    product_id: str,
    payload: HarvestPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[HarvestResponse]:
    """Register a harvest for the product in the path.

    The path product wins over any ``productoId`` in the body.
    """
    harvest = unwrap(
        coordinator.create_harvest_for_product(product_id, payload.to_domain(settings.timezone)),
        HARVEST_ALIASES,
    )
    return ApiResponse(
        message="Cosecha creada exitosamente",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.get("/{harvest_id}", response_model=ApiResponse[HarvestResponse])
async def get_product_harvest(
    product_id: str,
    harvest_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[HarvestResponse]:
    harvest = unwrap(coordinator.get_harvest_for_product(product_id, harvest_id))
    return ApiResponse(
        message="Cosecha encontrada",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.put("/{harvest_id}", response_model=ApiResponse[HarvestResponse])
async def update_product_harvest(
    product_id: str,
    harvest_id: str,
    payload: HarvestPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[HarvestResponse]:
    harvest = unwrap(
        coordinator.update_harvest_for_product(
            product_id,
            harvest_id,
            payload.to_domain(settings.timezone),
        ),
        HARVEST_ALIASES,
    )
    return ApiResponse(
        message="Cosecha actualizada exitosamente",
        data=HarvestResponse.from_domain(harvest),
        timestamp=clock(),
    )


@router.delete("/{harvest_id}", response_model=ApiResponse[None])
async def delete_product_harvest(
    product_id: str,
    harvest_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[None]:
    unwrap(coordinator.delete_harvest_for_product(product_id, harvest_id))
    return ApiResponse(message="Cosecha eliminada exitosamente", data=None, timestamp=clock())
