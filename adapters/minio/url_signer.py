"""
MinIO URL Signer Adapter.
"""

from datetime import timedelta
from typing import Optional

from core.storage import MinIOClient, get_minio_client
from domain.value_objects import SignedUrlRequest, SignedUrlResult
from ports.storage import UrlSignerPort

MAX_EXPIRY_SECONDS = 7 * 24 * 60 * 60  # SigV4 upper bound


class MinioUrlSigner(UrlSignerPort):
    """Presigns GET/PUT requests with the MinIO SDK."""

    def __init__(self, minio_client: Optional[MinIOClient] = None):
        self._minio = minio_client or get_minio_client()

    def sign(self, request: SignedUrlRequest) -> SignedUrlResult:
        if request.expires_in_seconds > MAX_EXPIRY_SECONDS:
            raise ValueError(
                f"expires_in_seconds must not exceed {MAX_EXPIRY_SECONDS} (7 days)"
            )

        response_headers = None
        if request.content_disposition:
            response_headers = {
                "response-content-disposition": request.content_disposition
            }

        url = self._minio.presigned_url(
            request.operation.value,
            request.reference.bucket,
            request.reference.key,
            expires=timedelta(seconds=request.expires_in_seconds),
            response_headers=response_headers,
        )
        return SignedUrlResult(url=url)
