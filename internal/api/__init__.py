"""
HTTP boundary for the object gateway.
Routes, request/response schemas and FastAPI dependencies.
"""

from . import dependencies
from . import routes
from . import schemas

__all__ = [
    "dependencies",
    "routes",
    "schemas",
]
