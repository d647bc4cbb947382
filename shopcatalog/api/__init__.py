"""API layer module.

Contains FastAPI routers and response schemas.
"""

from shopcatalog.api.catalog import router as catalog_router
from shopcatalog.api.health import router as health_router

__all__ = [
    "catalog_router",
    "health_router",
]
