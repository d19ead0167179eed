"""
Service layer implementing business logic.
Follows Service Layer Pattern and Single Responsibility Principle.
"""

from .storage_gateway import StorageGateway

__all__ = [
    "StorageGateway",
]
