"""
Common API schemas shared across different endpoints.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional, Any


class StandardResponse(BaseModel):
    """
    Standard API response format for all endpoints.

    - error_code: 0 = success, 1 = error
    - message: Success or error message
    - data: Response data (optional, only present on success)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": 0,
                    "message": "Object lookup completed",
                    "data": {"bucket": "reports", "key": "q1.csv", "exists": True},
                },
                {"error_code": 1, "message": "Access Denied.", "data": None},
            ]
        }
    )

    error_code: int = 0
    message: str
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response model for health check (internal use)."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "healthy",
                    "service": "Object Gateway",
                    "version": "1.0.0",
                    "storage_endpoint": "localhost:9000",
                }
            ]
        }
    )

    status: str
    service: str
    version: str
    storage_endpoint: str
