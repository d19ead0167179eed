"""
Domain layer: value objects, entities, responses and results.
"""

from .entities import ObjectMetadata, StreamingUploadHandle, WriteAck
from .responses import NOT_FOUND_MESSAGE, GatewayResponse
from .results import ResultKind, StorageResult
from .value_objects import (
    ObjectReference,
    SignedUrlOperation,
    SignedUrlRequest,
    SignedUrlResult,
)

__all__ = [
    "GatewayResponse",
    "NOT_FOUND_MESSAGE",
    "ObjectMetadata",
    "ObjectReference",
    "ResultKind",
    "SignedUrlOperation",
    "SignedUrlRequest",
    "SignedUrlResult",
    "StorageResult",
    "StreamingUploadHandle",
    "WriteAck",
]
