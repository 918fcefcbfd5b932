"""API routes module."""

from agropecuario.api.routes.harvests import router as harvests_router
from agropecuario.api.routes.health import router as health_router
from agropecuario.api.routes.product_harvests import router as product_harvests_router
from agropecuario.api.routes.products import router as products_router

__all__ = [
    "harvests_router",
    "health_router",
    "product_harvests_router",
    "products_router",
]
