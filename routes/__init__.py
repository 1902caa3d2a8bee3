"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.catalog import router as catalog_router
from routes.order import router as order_router

__all__ = [
    "catalog_router",
    "order_router",
]
