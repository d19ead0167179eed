"""
Ports (abstract interfaces) for external collaborators.
"""

from .storage import ArchiveWriterPort, BlobStorePort, ObjectBody, UrlSignerPort

__all__ = [
    "ArchiveWriterPort",
    "BlobStorePort",
    "ObjectBody",
    "UrlSignerPort",
]
