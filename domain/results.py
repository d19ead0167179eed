"""
Uniform outcome type for storage operations.

``StorageResult`` lets a caller tell a confirmed-absent object apart from a
failure that may go away on retry and from one that will not. Boundary
adapters decide how each kind is rendered; ``to_response`` gives the
HTTP-like default.
"""

from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, Optional

from domain.errors import error_message, is_not_found, is_transient
from domain.responses import NOT_FOUND_MESSAGE, GatewayResponse


class ResultKind(str, Enum):
    """Outcome of a storage operation."""

    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    TRANSIENT_FAILURE = "TRANSIENT_FAILURE"
    PERMANENT_FAILURE = "PERMANENT_FAILURE"


_STATUS_CODES = {
    ResultKind.SUCCESS: 200,
    ResultKind.NOT_FOUND: 404,
    ResultKind.TRANSIENT_FAILURE: 503,
    ResultKind.PERMANENT_FAILURE: 500,
}


@dataclass(frozen=True)
class StorageResult:
    kind: ResultKind
    payload: Any = None
    cause: Optional[BaseException] = None

    @classmethod
    def success(cls, payload: Any = None) -> "StorageResult":
        return cls(ResultKind.SUCCESS, payload=payload)

    @classmethod
    def not_found(cls, cause: Optional[BaseException] = None) -> "StorageResult":
        return cls(ResultKind.NOT_FOUND, cause=cause)

    @classmethod
    def transient_failure(cls, cause: BaseException) -> "StorageResult":
        return cls(ResultKind.TRANSIENT_FAILURE, cause=cause)

    @classmethod
    def permanent_failure(cls, cause: BaseException) -> "StorageResult":
        return cls(ResultKind.PERMANENT_FAILURE, cause=cause)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "StorageResult":
        """Classify a raised error into one of the failure kinds."""
        if is_not_found(exc):
            return cls.not_found(exc)
        if is_transient(exc):
            return cls.transient_failure(exc)
        return cls.permanent_failure(exc)

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.SUCCESS

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]

    @property
    def message(self) -> Optional[str]:
        if self.kind is ResultKind.NOT_FOUND:
            return NOT_FOUND_MESSAGE
        if self.cause is not None:
            return error_message(self.cause)
        return None

    def to_response(self) -> GatewayResponse:
        if not self.ok:
            return GatewayResponse.error(self.status_code, self.message)

        payload = self.payload
        if is_dataclass(payload) and not isinstance(payload, type):
            payload = asdict(payload)
        elif not isinstance(payload, dict):
            payload = {"data": payload}
        return GatewayResponse.success(payload, status_code=self.status_code)
