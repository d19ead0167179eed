"""
API Routes.
"""

from .health_routes import create_health_routes
from .object_routes import router as object_router

__all__ = [
    "create_health_routes",
    "object_router",
]
