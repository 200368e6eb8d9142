"""FastAPI/Starlette host integration."""

from .app import NegotiationApp, build_pipeline
from .utils import build_request_context, get_route_path, to_response

__all__ = [
    "NegotiationApp",
    "build_pipeline",
    "build_request_context",
    "get_route_path",
    "to_response",
]
