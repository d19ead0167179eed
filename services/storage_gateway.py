"""
Storage gateway service.

Convenience layer over an object store: reads, writes, existence checks,
presigned URLs and a streaming zip pipeline. Collaborators are injected
through ports so the service never touches the SDK directly.

Error contracts differ per operation:
- signing operations never raise; failures become a 500 ``GatewayResponse``
- ``put_object``, ``delete_object`` and ``file_exists`` (except for "not
  found") log and re-raise the store's error unchanged
- ``get_object`` logs and returns ``None``
- archive streaming logs and returns a ``StorageResult``
"""

import asyncio
import inspect
from typing import Any, BinaryIO, Callable, Optional, Sequence

from core.config import Settings, get_settings
from core.logger import logger
from core.streams import StreamAbortedError, close_stream, read_all
from domain.entities import StreamingUploadHandle, WriteAck
from domain.errors import error_message, is_not_found
from domain.responses import NOT_FOUND_MESSAGE, GatewayResponse
from domain.results import StorageResult
from domain.value_objects import (
    ObjectReference,
    SignedUrlOperation,
    SignedUrlRequest,
)
from ports.storage import ArchiveWriterPort, BlobStorePort, ObjectBody, UrlSignerPort

ZIP_CONTENT_TYPE = "application/zip"

TransformFn = Callable[[BinaryIO], Any]


class StorageGateway:
    """Service for object storage access."""

    def __init__(
        self,
        blob_store: BlobStorePort,
        url_signer: UrlSignerPort,
        archive_factory: Callable[[], ArchiveWriterPort],
        settings: Optional[Settings] = None,
    ):
        self.blob_store = blob_store
        self.url_signer = url_signer
        self.archive_factory = archive_factory
        self.settings = settings or get_settings()
        logger.debug("StorageGateway initialized")

    def get_client(self) -> Any:
        """Underlying SDK client, for calls the gateway does not wrap."""
        return self.blob_store.client

    # ------------------------------------------------------------------
    # Object read/write/existence
    # ------------------------------------------------------------------

    async def get_object(
        self,
        ref: ObjectReference,
        transform_response: bool = True,
        transform_fn: Optional[TransformFn] = None,
    ) -> Any:
        """
        Read an object.

        Args:
            ref: Object to read
            transform_response: When False, return the raw byte stream
                (the caller must close it)
            transform_fn: Applied to the raw stream instead of text
                decoding; may be sync or async and owns the stream
                unless it raises

        Returns:
            Decoded text, the transform's result, or the raw stream.
            ``None`` when the read fails for any reason, including a
            missing object; use ``file_exists`` or ``fetch_object`` to
            tell those apart.
        """
        try:
            body = await self.blob_store.get(ref)

            if not transform_response:
                return body

            if transform_fn is not None:
                try:
                    result = transform_fn(body)
                    if inspect.isawaitable(result):
                        result = await result
                except Exception:
                    close_stream(body)
                    raise
                return result

            try:
                data = await self._read_body(body)
            finally:
                close_stream(body)
            return data.decode(self.settings.text_encoding, errors="replace")

        except Exception as e:
            logger.error(f"Error getting object {ref}: {e}")
            return None

    async def fetch_object(self, ref: ObjectReference) -> StorageResult:
        """Read an object's bytes, reporting the outcome as a ``StorageResult``."""
        try:
            body = await self.blob_store.get(ref)
            try:
                data = await self._read_body(body)
            finally:
                close_stream(body)
            return StorageResult.success(data)

        except Exception as e:
            logger.error(f"Error fetching object {ref}: {e}")
            return StorageResult.from_exception(e)

    async def put_object(
        self,
        ref: ObjectReference,
        body: ObjectBody,
        content_type: Optional[str] = None,
    ) -> WriteAck:
        """Write a string, buffer or stream. Store failures propagate."""
        try:
            return await self.blob_store.put(ref, body, content_type=content_type)
        except Exception as e:
            logger.error(f"Error putting object {ref}: {e}")
            raise

    async def delete_object(self, ref: ObjectReference) -> None:
        """Remove an object. Store failures propagate."""
        try:
            await self.blob_store.delete(ref)
        except Exception as e:
            logger.error(f"Error deleting object {ref}: {e}")
            raise

    async def file_exists(self, ref: ObjectReference) -> bool:
        """
        Metadata-only existence probe.

        Returns False only when the store reports the object as not found.
        Any other failure means existence could not be determined and is
        re-raised.
        """
        try:
            await self.blob_store.head(ref)
            return True
        except Exception as e:
            if is_not_found(e):
                return False
            logger.error(f"Error checking if object exists {ref}: {e}")
            raise

    # ------------------------------------------------------------------
    # Signed URLs
    # ------------------------------------------------------------------

    async def generate_get_presigned_url(
        self,
        ref: ObjectReference,
        expires_in: int,
        download_filename: Optional[str] = None,
    ) -> GatewayResponse:
        """
        Presigned download link for an existing object.

        The object is checked immediately before signing; it may still be
        deleted before the link is used.
        """
        try:
            if not await self.file_exists(ref):
                return GatewayResponse.error(404, NOT_FOUND_MESSAGE)

            request = SignedUrlRequest(
                reference=ref,
                operation=SignedUrlOperation.GET,
                expires_in_seconds=expires_in,
                download_filename=download_filename,
            )
            result = self.url_signer.sign(request)
            return GatewayResponse.success({"presignedUrl": result.url})

        except Exception as e:
            logger.error(f"Error generating get presigned URL for {ref}: {e}")
            return GatewayResponse.error(500, error_message(e))

    async def generate_put_presigned_url(
        self, ref: ObjectReference, expires_in: int
    ) -> GatewayResponse:
        """Presigned upload link; the object need not exist yet."""
        try:
            request = SignedUrlRequest(
                reference=ref,
                operation=SignedUrlOperation.PUT,
                expires_in_seconds=expires_in,
            )
            result = self.url_signer.sign(request)
            return GatewayResponse.success({"presignedUrl": result.url})

        except Exception as e:
            logger.error(f"Error generating put presigned URL for {ref}: {e}")
            return GatewayResponse.error(500, error_message(e))

    # ------------------------------------------------------------------
    # Streaming archive
    # ------------------------------------------------------------------

    async def get_writable_stream(
        self, ref: ObjectReference, content_type: Optional[str] = None
    ) -> StreamingUploadHandle:
        """Open a streaming upload to ``ref``."""
        return self.blob_store.open_write_stream(ref, content_type=content_type)

    async def generate_and_stream_zipfile_to_s3(
        self, bucket: str, zip_file_key: str, source_key: str
    ) -> StorageResult:
        """Zip one object into another object of the same bucket, streaming."""
        try:
            archive_ref = ObjectReference(bucket, zip_file_key)
            source_ref = ObjectReference(bucket, source_key)
        except ValueError as e:
            logger.error(f"Error in generate_and_stream_zipfile_to_s3: {e}")
            return StorageResult.permanent_failure(e)

        return await self.stream_archive_to_store(archive_ref, [source_ref])

    async def stream_archive_to_store(
        self,
        archive_ref: ObjectReference,
        source_refs: Sequence[ObjectReference],
    ) -> StorageResult:
        """
        Build a zip of ``source_refs`` and upload it to ``archive_ref``.

        Pipeline: source read streams -> compressor -> bounded pipe ->
        multipart upload. The compressor and the upload run concurrently in
        worker threads; the upload's completion is awaited after the archive
        is finalized. Each entry is named after its source key.

        Never raises. Failures are logged and reported in the result; on
        failure the upload is aborted so no partial archive is stored.
        """
        sources = []
        handle = None
        try:
            if not source_refs:
                raise ValueError("at least one source object is required")

            archive = self.archive_factory()
            for source_ref in source_refs:
                stream = await self.blob_store.get(source_ref)
                sources.append(stream)
                archive.append(stream, name=source_ref.key)

            handle = await self.get_writable_stream(
                archive_ref, content_type=ZIP_CONTENT_TYPE
            )
            archive.pipe(handle.sink)

            archive_size = await archive.finalize()
            ack = await handle.completion

            logger.info(
                f"Streamed archive {archive_ref} ({len(sources)} entries, {archive_size} bytes)"
            )
            return StorageResult.success(ack)

        except Exception as e:
            logger.error(f"Error in stream_archive_to_store for {archive_ref}: {e}")
            if handle is not None:
                handle.abort(e)
                await asyncio.gather(handle.completion, return_exceptions=True)
            for stream in sources:
                close_stream(stream)
            # A torn-down pipe carries the failure of the other pipeline stage
            if isinstance(e, StreamAbortedError) and e.__cause__ is not None:
                return StorageResult.from_exception(e.__cause__)
            return StorageResult.from_exception(e)

    async def _read_body(self, body: BinaryIO) -> bytes:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, read_all, body)
