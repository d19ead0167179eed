"""
API Schemas (Request/Response Models).
"""

from .common_schemas import (
    StandardResponse,
    HealthResponse,
)
from .object_schemas import (
    ArchiveRequest,
    ArchiveResponse,
    MessageResponse,
    PresignedUrlResponse,
)

__all__ = [
    # Common schemas
    "StandardResponse",
    "HealthResponse",
    # Object schemas
    "ArchiveRequest",
    "ArchiveResponse",
    "MessageResponse",
    "PresignedUrlResponse",
]
