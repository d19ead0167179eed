"""
API utility functions for response formatting.
"""

from typing import Any, Dict

from fastapi.responses import JSONResponse

from domain.responses import GatewayResponse


def success_response(message: str = "Success", data: Any = None) -> Dict:
    """
    Create a success response.

    Args:
        message: Success message
        data: Response data (optional)

    Returns:
        Standard response dictionary with error_code=0
    """
    return {"error_code": 0, "message": message, "data": data}


def render_gateway_response(response: GatewayResponse) -> JSONResponse:
    """Pass a gateway response through as-is: same status, same JSON body."""
    return JSONResponse(status_code=response.status_code, content=response.json())
