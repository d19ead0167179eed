"""
Storage Ports.
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Union

from domain.entities import ObjectMetadata, StreamingUploadHandle, WriteAck
from domain.value_objects import ObjectReference, SignedUrlRequest, SignedUrlResult

ObjectBody = Union[str, bytes, bytearray, BinaryIO]


class BlobStorePort(ABC):
    """Abstract interface for an object store."""

    @property
    @abstractmethod
    def client(self) -> Any:
        """Underlying SDK client."""
        pass

    @abstractmethod
    async def get(self, ref: ObjectReference) -> BinaryIO:
        """Open an object as a raw byte stream. Raises when it cannot be read."""
        pass

    @abstractmethod
    async def put(
        self,
        ref: ObjectReference,
        body: ObjectBody,
        content_type: Optional[str] = None,
    ) -> WriteAck:
        """Write a string, buffer or stream to the reference."""
        pass

    @abstractmethod
    async def head(self, ref: ObjectReference) -> ObjectMetadata:
        """Metadata-only probe. Raises the store's error when absent."""
        pass

    @abstractmethod
    async def delete(self, ref: ObjectReference) -> None:
        """Remove an object."""
        pass

    @abstractmethod
    def open_write_stream(
        self, ref: ObjectReference, content_type: Optional[str] = None
    ) -> StreamingUploadHandle:
        """Start a streaming upload; must be called from a running event loop."""
        pass


class UrlSignerPort(ABC):
    """Abstract interface for presigned URL generation."""

    @abstractmethod
    def sign(self, request: SignedUrlRequest) -> SignedUrlResult:
        """Sign a request without contacting the store."""
        pass


class ArchiveWriterPort(ABC):
    """Streaming archive writer: entries in, compressed bytes out."""

    @abstractmethod
    def append(self, stream: BinaryIO, name: str) -> None:
        """Queue a readable stream as an archive entry."""
        pass

    @abstractmethod
    def pipe(self, sink: Any) -> None:
        """Set the writable destination for the archive bytes."""
        pass

    @abstractmethod
    async def finalize(self) -> int:
        """Write all entries and the archive trailer, then close the sink.

        Returns the number of archive bytes produced.
        """
        pass
