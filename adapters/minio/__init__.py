"""
MinIO adapters.
"""

from .blob_store import MinioBlobStore
from .url_signer import MinioUrlSigner

__all__ = [
    "MinioBlobStore",
    "MinioUrlSigner",
]
