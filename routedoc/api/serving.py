"""Serve assembled documents from the host's routing table."""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Union

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..docs.assembler import assemble
from ..docs.models import AssembledDocument, EndpointData, RouteEntry
from ..utils.config import DOCS_PATH
from ..utils.errors import ErrorCode
from ..utils.logging import request_scope
from ._shared import error_response
from .routes import DocumentedRoute, compile_routes

_LOGGER = logging.getLogger("routedoc.api")


@dataclass(frozen=True)
class DocumentResponse:
    body: AssembledDocument
    status: int = 200


DocumentCallback = Callable[[Optional[BaseException], Optional[DocumentResponse]], None]
ErrorHandler = Callable[[Request, Exception], Union[Response, Awaitable[Response]]]


def respond(
    skeleton: Optional[Mapping[str, Any]],
    routes: Iterable[RouteEntry],
    *,
    logger: Optional[logging.Logger] = None,
) -> DocumentResponse:
    return DocumentResponse(body=assemble(skeleton, routes, logger=logger))


def serve_document(
    skeleton: Optional[Mapping[str, Any]],
    routes: Iterable[RouteEntry],
    done: DocumentCallback,
    *,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Callback flavour of :func:`respond`.

    ``done(None, response)`` on success, ``done(exc, None)`` when assembly fails.
    Assembly errors never escape this function.
    """

    logger = logger or _LOGGER
    try:
        response = respond(skeleton, routes, logger=logger)
    except Exception as exc:
        logger.exception("docs.error", extra={"error": str(exc)})
        done(exc, None)
        return
    done(None, response)


def find_skeleton(
    routes: Iterable[RouteEntry], endpoint: Any, method: str
) -> Optional[Mapping[str, Any]]:
    """Return the documentation overrides declared by the route serving ``endpoint``."""

    method = method.upper()
    for entry in routes:
        if entry.endpoint is not endpoint:
            continue
        data = entry.methods.get(method)
        if data is None and method == "HEAD":
            data = entry.methods.get("GET")
        if data is not None and isinstance(data.documentation_overrides, Mapping):
            return data.documentation_overrides
    return None


def default_error_handler(request: Request, exc: Exception) -> Response:
    return error_response(ErrorCode.INTERNAL)


async def _report_error(handler: ErrorHandler, request: Request, exc: Exception) -> Response:
    result = handler(request, exc)
    if inspect.isawaitable(result):
        result = await result
    return result


def make_docs_route(
    path: str = DOCS_PATH,
    skeleton: Optional[Mapping[str, Any]] = None,
    *,
    name: str = "openapi",
    on_error: Optional[ErrorHandler] = None,
    logger: Optional[logging.Logger] = None,
) -> DocumentedRoute:
    """Build the GET route that serves the document described by ``skeleton``.

    The route is excluded from the documents it serves. At request time it
    reads the full route table of the outermost router, so routes added to the
    application later are picked up.
    """

    logger = logger or _LOGGER
    declared = dict(skeleton or {})
    handler = on_error or default_error_handler

    async def docs_endpoint(request: Request) -> Response:
        try:
            with request_scope("docs", logger=logger, extra={"path": request.url.path}) as ctx:
                router = request.scope.get("router") or request.app.router
                table = compile_routes(router.routes)
                resolved = find_skeleton(table, docs_endpoint, request.method)
                result = respond(declared if resolved is None else resolved, table, logger=logger)
                ctx.log(
                    logging.INFO,
                    "docs.served",
                    extra={
                        "ids": sorted(result.body.identifiers),
                        "paths": len(result.body.entries),
                    },
                )
        except Exception as exc:
            logger.exception("docs.error", extra={"error": str(exc), "path": request.url.path})
            return await _report_error(handler, request, exc)
        return JSONResponse(result.body, status_code=result.status)

    return DocumentedRoute(
        path,
        docs_endpoint,
        methods=["GET"],
        name=name,
        docs=EndpointData(documentation_overrides=declared, excluded_from_docs=True),
    )


__all__ = [
    "DocumentCallback",
    "DocumentResponse",
    "ErrorHandler",
    "default_error_handler",
    "find_skeleton",
    "make_docs_route",
    "respond",
    "serve_document",
]
