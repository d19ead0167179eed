"""
MinIO Object Storage client.

Thin synchronous wrapper around the ``minio`` SDK. Every call is blocking;
the async adapters in ``adapters.minio`` run them on an executor.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Any, BinaryIO, Dict, Optional

from minio import Minio
from minio.error import S3Error

from core.config import Settings, get_settings
from core.logger import logger


class MinIOClient:
    """MinIO client for reading, writing and signing objects."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Minio] = None):
        """
        Initialize MinIO client.

        Args:
            settings: Application settings (defaults to the cached instance)
            client: Pre-built SDK client, mostly useful in tests
        """
        self.settings = settings or get_settings()
        self.client = client or Minio(
            self.settings.minio_endpoint,
            access_key=self.settings.minio_access_key,
            secret_key=self.settings.minio_secret_key,
            session_token=self.settings.minio_session_token,
            secure=self.settings.minio_use_ssl,
            region=self.settings.minio_region,
        )

        logger.info(f"MinIO client initialized: {self.settings.minio_endpoint}")

    def get_object(self, bucket_name: str, object_name: str):
        """
        Open an object for reading.

        Returns:
            Streaming HTTP response. The caller must close it and release
            the connection (see ``core.streams.close_stream``).
        """
        try:
            response = self.client.get_object(
                bucket_name=bucket_name, object_name=object_name
            )
            logger.debug(f"Got object stream from MinIO: {bucket_name}/{object_name}")
            return response

        except S3Error as e:
            logger.debug(f"Failed to get object stream from MinIO: {e}")
            raise

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        length: int,
        content_type: str = "application/octet-stream",
        part_size: int = 0,
        num_parallel_uploads: int = 3,
    ):
        """
        Upload a stream.

        Args:
            data: Readable object
            length: Byte length, or -1 for a multipart upload of unknown size
            part_size: Multipart part size, required when length is -1
            num_parallel_uploads: Concurrent part uploads

        Returns:
            ``minio.helpers.ObjectWriteResult``
        """
        try:
            result = self.client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=length,
                content_type=content_type,
                part_size=part_size,
                num_parallel_uploads=num_parallel_uploads,
            )
            logger.info(f"Uploaded object to MinIO: {bucket_name}/{object_name}")
            return result

        except S3Error as e:
            logger.error(f"Failed to upload object to MinIO: {e}")
            raise

    def stat_object(self, bucket_name: str, object_name: str):
        """Fetch object metadata without the body (HEAD)."""
        return self.client.stat_object(
            bucket_name=bucket_name, object_name=object_name
        )

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        """Delete an object."""
        try:
            self.client.remove_object(
                bucket_name=bucket_name, object_name=object_name
            )
            logger.info(f"Deleted object from MinIO: {bucket_name}/{object_name}")

        except S3Error as e:
            logger.error(f"Failed to delete object from MinIO: {e}")
            raise

    def presigned_url(
        self,
        method: str,
        bucket_name: str,
        object_name: str,
        expires: timedelta,
        response_headers: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Generate a presigned URL for temporary access to an object.

        Signing is local as long as the client has a fixed region.
        """
        url = self.client.get_presigned_url(
            method=method,
            bucket_name=bucket_name,
            object_name=object_name,
            expires=expires,
            response_headers=response_headers,
        )
        logger.debug(f"Generated presigned {method} URL for: {bucket_name}/{object_name}")
        return url


@lru_cache()
def get_minio_client() -> MinIOClient:
    """
    Get or create global MinIO client instance (singleton).

    Returns:
        MinIOClient instance
    """
    return MinIOClient()
