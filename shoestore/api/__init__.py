"""API layer module.

Contains FastAPI routers and response schemas.
"""

from shoestore.api.health import router as health_router
from shoestore.api.home import router as home_router
from shoestore.api.products import router as products_router

__all__ = [
    "health_router",
    "home_router",
    "products_router",
]
