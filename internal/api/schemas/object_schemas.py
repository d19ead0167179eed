"""
Object storage API schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PresignedUrlResponse(BaseModel):
    """Body of a successful presigned URL request."""

    presignedUrl: str


class MessageResponse(BaseModel):
    """Body of a failed gateway request."""

    message: str


class ArchiveRequest(BaseModel):
    """Request to zip stored objects into a new object of the same bucket."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "zip_file_key": "exports/q1.zip",
                    "source_keys": ["reports/q1.csv"],
                }
            ]
        }
    )

    zip_file_key: str = Field(..., min_length=1, description="Key of the archive to create")
    source_keys: List[str] = Field(
        ..., min_length=1, description="Keys to add; each becomes an entry of the same name"
    )


class ArchiveResponse(BaseModel):
    """Acknowledgement of a stored archive."""

    bucket: str
    key: str
    etag: Optional[str] = None
    version_id: Optional[str] = None
