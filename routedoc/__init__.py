"""Swagger 2.0 documents synthesized from Starlette route metadata."""

from .utils.env import load_env

# Ensure environment defaults from `.env` are available to all modules on import.
load_env()

from .api.routes import DocumentedRoute, compile_routes, documented  # noqa: E402
from .api.serving import make_docs_route, serve_document  # noqa: E402
from .docs import EndpointData, RouteEntry, assemble  # noqa: E402

__all__ = [
    "DocumentedRoute",
    "EndpointData",
    "RouteEntry",
    "assemble",
    "compile_routes",
    "documented",
    "make_docs_route",
    "serve_document",
]
