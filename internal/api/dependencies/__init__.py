"""
FastAPI dependencies.
"""

from .gateway_dependencies import get_storage_gateway

__all__ = ["get_storage_gateway"]
