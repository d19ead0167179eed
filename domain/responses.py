"""
HTTP-like response envelope returned by user-facing gateway operations.
"""

import json
from dataclasses import dataclass
from typing import Any

NOT_FOUND_MESSAGE = "The specified key does not exist in the bucket."


def dump_body(payload: Any) -> str:
    """Serialize a payload as compact JSON."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


@dataclass(frozen=True)
class GatewayResponse:
    """Status code plus a JSON string body."""

    status_code: int
    body: str

    @classmethod
    def success(cls, payload: Any, status_code: int = 200) -> "GatewayResponse":
        return cls(status_code=status_code, body=dump_body(payload))

    @classmethod
    def error(cls, status_code: int, message: str) -> "GatewayResponse":
        return cls(status_code=status_code, body=dump_body({"message": message}))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decoded body."""
        return json.loads(self.body)
