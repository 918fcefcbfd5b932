"""Product endpoints under /api/productos."""

from fastapi import APIRouter, Query, status

from agropecuario.api.deps import ClockDep, CoordinatorDep, SettingsDep
from agropecuario.api.errors import ApiError, unwrap
from agropecuario.core.outcome import invalid_query
from agropecuario.schemas.common import ApiResponse, SystemStatisticsResponse, field_aliases
from agropecuario.schemas.product import (
    ProductPayload,
    ProductResponse,
    ProductStatisticsResponse,
)

router = APIRouter(prefix="/api/productos")

PRODUCT_ALIASES = field_aliases(ProductPayload)


# Fixed paths first, before /{product_id}


@router.get("/estadisticas", response_model=ApiResponse[SystemStatisticsResponse])
async def system_statistics(
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[SystemStatisticsResponse]:
    """Service-wide counters plus server identity."""
    now = clock()
    stats = SystemStatisticsResponse(
        total_products=coordinator.count_products(),
        total_harvests=coordinator.count_harvests(),
        server=settings.service_name,
        version=settings.service_version,
        timestamp=now,
    )
    return ApiResponse(message="Estadísticas del sistema", data=stats, timestamp=now)


@router.get("", response_model=ApiResponse[list[ProductResponse]])
async def list_products(
    coordinator: CoordinatorDep,
    clock: ClockDep,
    tipo: str | None = Query(default=None, description="Crop type (exact, case-insensitive)"),
    nombre: str | None = Query(default=None, description="Name fragment (case-insensitive)"),
    temporada: str | None = Query(default=None, description="Season (exact, case-insensitive)"),
    hectareas_min: float | None = Query(default=None, alias="hectareasMin"),
    hectareas_max: float | None = Query(default=None, alias="hectareasMax"),
) -> ApiResponse[list[ProductResponse]]:
    """List products, optionally filtered by one filter group.

    The groups (tipo, nombre, temporada, hectareasMin/hectareasMax) cannot be
    combined. Either hectare bound may be given alone.
    """
    groups = {
        "tipo": tipo is not None,
        "nombre": nombre is not None,
        "temporada": temporada is not None,
        "hectareas": hectareas_min is not None or hectareas_max is not None,
    }
    active = [name for name, used in groups.items() if used]
    if len(active) > 1:
        raise ApiError(
            invalid_query(
                "Solo se permite un filtro a la vez: " + ", ".join(active)
            )
        )

    if tipo is not None:
        products = coordinator.find_products_by_crop_type(tipo)
        message = f"Se encontraron {len(products)} productos del tipo '{tipo}'"
    elif nombre is not None:
        products = coordinator.find_products_by_name(nombre)
        message = f"Se encontraron {len(products)} productos con el nombre '{nombre}'"
    elif temporada is not None:
        products = coordinator.find_products_by_season(temporada)
        message = f"Se encontraron {len(products)} productos de la temporada '{temporada}'"
    elif groups["hectareas"]:
        products = coordinator.find_products_by_hectare_range(hectareas_min, hectareas_max)
        message = f"Se encontraron {len(products)} productos en el rango de hectáreas"
    else:
        products = coordinator.list_products()
        message = "Productos obtenidos exitosamente"

    return ApiResponse(
        message=message,
        data=[ProductResponse.from_domain(p) for p in products],
        timestamp=clock(),
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_product(
    product_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[ProductResponse]:
    product = unwrap(coordinator.get_product(product_id))
    return ApiResponse(
        message="Producto encontrado",
        data=ProductResponse.from_domain(product),
        timestamp=clock(),
    )


@router.get("/{product_id}/estadisticas", response_model=ApiResponse[ProductStatisticsResponse])
async def product_statistics(
    product_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[ProductStatisticsResponse]:
    """Harvest totals and profitability metrics for one product."""
    stats = unwrap(coordinator.product_statistics(product_id))
    return ApiResponse(
        message=f"Estadísticas del producto {product_id}",
        data=ProductStatisticsResponse.from_domain(stats),
        timestamp=clock(),
    )


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    payload: ProductPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[ProductResponse]:
    product = unwrap(
        coordinator.create_product(payload.to_domain(settings.timezone)),
        PRODUCT_ALIASES,
    )
    return ApiResponse(
        message="Producto creado exitosamente",
        data=ProductResponse.from_domain(product),
        timestamp=clock(),
    )


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
async def update_product(
    product_id: str,
    payload: ProductPayload,
    coordinator: CoordinatorDep,
    clock: ClockDep,
    settings: SettingsDep,
) -> ApiResponse[ProductResponse]:
    """Full replace of the product's mutable fields."""
    product = unwrap(
        coordinator.update_product(product_id, payload.to_domain(settings.timezone)),
        PRODUCT_ALIASES,
    )
    return ApiResponse(
        message="Producto actualizado exitosamente",
        data=ProductResponse.from_domain(product),
        timestamp=clock(),
    )


@router.delete("/{product_id}", response_model=ApiResponse[None])
async def delete_product(
    product_id: str,
    coordinator: CoordinatorDep,
    clock: ClockDep,
) -> ApiResponse[None]:
    """Delete a product; rejected with 409 while it still has harvests."""
    unwrap(coordinator.delete_product(product_id))
    return ApiResponse(message="Producto eliminado exitosamente", data=None, timestamp=clock())
