"""
Domain entities for object storage operations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Optional


@dataclass
class ObjectMetadata:
    """Result of a metadata-only probe."""

    bucket: str
    key: str
    size: Optional[int] = None
    etag: Optional[str] = None
    content_type: Optional[str] = None
    last_modified: Optional[datetime] = None


@dataclass
class WriteAck:
    """Store acknowledgement of a durable write."""

    bucket: str
    key: str
    etag: Optional[str] = None
    version_id: Optional[str] = None


@dataclass
class StreamingUploadHandle:
    """
    In-progress write of an object.

    ``sink`` accepts bytes (``write``/``flush``/``close``) and applies
    backpressure. ``completion`` resolves to a ``WriteAck`` once the store
    confirms the object, or raises. The creator owns both ends; nothing may
    be written after ``completion`` settles.
    """

    sink: Any
    completion: Awaitable[WriteAck]

    def close(self):
        """Signal that no more bytes will be written."""
        self.sink.close()

    def abort(self, exc: Optional[BaseException] = None):
        """Fail the sink so the upload is abandoned rather than committed."""
        self.sink.abort(exc)
