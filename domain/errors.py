"""
Classification of storage SDK errors.
"""

from typing import Optional

import urllib3
from minio.error import S3Error

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound", "ResourceNotFound"})
TRANSIENT_CODES = frozenset({"InternalError", "ServiceUnavailable", "SlowDown", "RequestTimeout"})
TRANSIENT_STATUSES = frozenset({500, 502, 503, 504})


def error_code(exc: BaseException) -> Optional[str]:
    """Provider error code (``NoSuchKey``, ``AccessDenied``...), if any."""
    return getattr(exc, "code", None)


def error_status(exc: BaseException) -> Optional[int]:
    """HTTP status attached to an SDK error, if any."""
    response = getattr(exc, "response", None)
    status = getattr(response, "status", None)
    if isinstance(status, int):
        return status
    status = getattr(exc, "status", None)
    return status if isinstance(status, int) else None


def error_message(exc: BaseException) -> str:
    """Human readable message, preferring the provider's own text."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


def is_not_found(exc: BaseException) -> bool:
    """True when the store reported the object as absent."""
    if isinstance(exc, FileNotFoundError):
        return True
    if error_code(exc) in NOT_FOUND_CODES:
        return True
    return error_status(exc) == 404


def is_transient(exc: BaseException) -> bool:
    """True for failures a retry could plausibly fix."""
    if isinstance(exc, (urllib3.exceptions.HTTPError, ConnectionError, TimeoutError)):
        return True
    if isinstance(exc, S3Error):
        return error_code(exc) in TRANSIENT_CODES or error_status(exc) in TRANSIENT_STATUSES
    return False
