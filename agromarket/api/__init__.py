"""API layer for AgroMarket.

Routers, request/response schemas and middleware.
"""

from agromarket.api.health import router as health_router
from agromarket.api.marketplace import router as marketplace_router
from agromarket.api.products import router as products_router

__all__ = [
    "health_router",
    "marketplace_router",
    "products_router",
]
