"""
Internal package.
Contains the HTTP API routes, schemas and dependencies.
"""

from . import api

__all__ = [
    "api",
]
