"""
Domain value objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a string the way browsers expect in header parameters."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


@dataclass(frozen=True)
class ObjectReference:
    """Bucket and key identifying a blob."""

    bucket: str
    key: str

    def __post_init__(self):
        if not self.bucket:
            raise ValueError("bucket must be a non-empty string")
        if not self.key:
            raise ValueError("key must be a non-empty string")

    def __str__(self):
        return f"{self.bucket}/{self.key}"


class SignedUrlOperation(str, Enum):
    """Operation a signed URL authorizes."""

    GET = "GET"
    PUT = "PUT"


@dataclass(frozen=True)
class SignedUrlRequest:
    """Request for a time-limited URL on a single object."""

    reference: ObjectReference
    operation: SignedUrlOperation
    expires_in_seconds: int
    download_filename: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.expires_in_seconds, bool) or not isinstance(
            self.expires_in_seconds, int
        ):
            raise TypeError("expires_in_seconds must be an integer")
        if self.expires_in_seconds <= 0:
            raise ValueError("expires_in_seconds must be positive")

    @property
    def content_disposition(self) -> Optional[str]:
        """Inline disposition suggesting ``download_filename`` to the browser."""
        if not self.download_filename:
            return None
        return f'inline; filename="{encode_uri_component(self.download_filename)}"'


@dataclass(frozen=True)
class SignedUrlResult:
    """Signed URL valid until the request's expiry."""

    url: str

    def __str__(self):
        return self.url
