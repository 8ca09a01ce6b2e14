"""Application wiring for documented Starlette services."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from .api.serving import ErrorHandler, make_docs_route
from .error_handlers import install_error_handlers
from .utils.config import DEBUG, DOCS_PATH
from .utils.logging import configure_root

_CONFIGURED = False


def configure() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    configure_root()
    _CONFIGURED = True


def build_app(
    routes: Iterable[BaseRoute],
    *,
    skeleton: Optional[Mapping[str, Any]] = None,
    docs_path: str = DOCS_PATH,
    middleware: Optional[Sequence[Middleware]] = None,
    on_error: Optional[ErrorHandler] = None,
    debug: bool = DEBUG,
) -> Starlette:
    """Create a Starlette app serving ``routes`` plus their document at ``docs_path``."""

    configure()
    app_routes = list(routes)
    app_routes.append(make_docs_route(docs_path, skeleton, on_error=on_error))
    app = Starlette(debug=debug, routes=app_routes, middleware=middleware)
    install_error_handlers(app)
    return app


__all__ = ["build_app", "configure"]
