"""
MinIO Blob Store Adapter.
"""

import asyncio
import io
from functools import partial
from typing import Any, BinaryIO, Optional, Tuple

from core.config import Settings, get_settings
from core.logger import logger
from core.storage import MinIOClient, get_minio_client
from core.streams import BoundedPipe
from domain.entities import ObjectMetadata, StreamingUploadHandle, WriteAck
from domain.value_objects import ObjectReference
from ports.storage import BlobStorePort, ObjectBody

DEFAULT_CONTENT_TYPE = "application/octet-stream"
UNKNOWN_LENGTH = -1


def remaining_length(stream: Any) -> int:
    """Bytes left in a seekable stream, or -1 when it cannot be measured."""
    try:
        if not stream.seekable():
            return UNKNOWN_LENGTH
        position = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(position)
        return end - position
    except (AttributeError, OSError):
        return UNKNOWN_LENGTH


class MinioBlobStore(BlobStorePort):
    """Async adapter over the blocking MinIO client."""

    def __init__(
        self,
        minio_client: Optional[MinIOClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._minio = minio_client or get_minio_client()

    @property
    def client(self) -> Any:
        return self._minio.client

    async def _run(self, func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    def _prepare_body(self, body: ObjectBody) -> Tuple[BinaryIO, int]:
        if isinstance(body, str):
            body = body.encode(self.settings.text_encoding)
        if isinstance(body, (bytes, bytearray, memoryview)):
            data = bytes(body)
            return io.BytesIO(data), len(data)
        if callable(getattr(body, "read", None)):
            return body, remaining_length(body)
        raise TypeError(
            f"Unsupported body type {type(body).__name__}: expected str, bytes or a readable stream"
        )

    @staticmethod
    def _to_ack(ref: ObjectReference, result: Any) -> WriteAck:
        return WriteAck(
            bucket=ref.bucket,
            key=ref.key,
            etag=getattr(result, "etag", None),
            version_id=getattr(result, "version_id", None),
        )

    async def get(self, ref: ObjectReference) -> BinaryIO:
        return await self._run(self._minio.get_object, ref.bucket, ref.key)

    async def put(
        self,
        ref: ObjectReference,
        body: ObjectBody,
        content_type: Optional[str] = None,
    ) -> WriteAck:
        data, length = self._prepare_body(body)
        part_size = self.settings.upload_part_size if length == UNKNOWN_LENGTH else 0

        result = await self._run(
            self._minio.put_object,
            ref.bucket,
            ref.key,
            data,
            length,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            part_size=part_size,
        )
        return self._to_ack(ref, result)

    async def head(self, ref: ObjectReference) -> ObjectMetadata:
        stat = await self._run(self._minio.stat_object, ref.bucket, ref.key)
        return ObjectMetadata(
            bucket=ref.bucket,
            key=ref.key,
            size=getattr(stat, "size", None),
            etag=getattr(stat, "etag", None),
            content_type=getattr(stat, "content_type", None),
            last_modified=getattr(stat, "last_modified", None),
        )

    async def delete(self, ref: ObjectReference) -> None:
        await self._run(self._minio.remove_object, ref.bucket, ref.key)

    def open_write_stream(
        self, ref: ObjectReference, content_type: Optional[str] = None
    ) -> StreamingUploadHandle:
        pipe = BoundedPipe(max_buffer_size=self.settings.stream_buffer_size)

        def _upload() -> WriteAck:
            try:
                # One part in flight keeps memory at a single part_size
                result = self._minio.put_object(
                    ref.bucket,
                    ref.key,
                    pipe,
                    UNKNOWN_LENGTH,
                    content_type=content_type or DEFAULT_CONTENT_TYPE,
                    part_size=self.settings.upload_part_size,
                    num_parallel_uploads=1,
                )
            except BaseException as exc:
                pipe.abort(exc)
                raise
            logger.debug(f"Streaming upload finished: {ref} ({pipe.bytes_read} bytes)")
            return self._to_ack(ref, result)

        loop = asyncio.get_running_loop()
        completion = loop.run_in_executor(None, _upload)
        logger.debug(f"Opened streaming upload to {ref}")
        return StreamingUploadHandle(sink=pipe, completion=completion)
