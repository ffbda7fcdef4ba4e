"""API layer module.

Contains FastAPI routers and response schemas.
"""

from productdesk.api.categories import router as categories_router
from productdesk.api.health import router as health_router
from productdesk.api.products import router as products_router

__all__ = [
    "categories_router",
    "health_router",
    "products_router",
]
