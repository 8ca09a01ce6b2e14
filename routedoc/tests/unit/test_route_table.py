"""Flattening Starlette routes into route entries."""
from __future__ import annotations

from typing import Any

from starlette.endpoints import HTTPEndpoint
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route, WebSocketRoute

from routedoc.api.routes import DocumentedRoute, compile_routes, documented, endpoint_data
from routedoc.docs.assembler import assemble
from routedoc.docs.models import EndpointData


class TracingMiddleware:
    documentation_overrides = {"x-traced": True}

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope, receive, send) -> None:  # noqa: ANN001
        await self.app(scope, receive, send)


@documented(tags=["math"], summary="adds numbers")
async def plus(request: Request) -> JSONResponse:
    return JSONResponse({"result": 3})


async def plain(request: Request) -> JSONResponse:
    return JSONResponse({})


class Items(HTTPEndpoint):
    @documented(summary="create item")
    async def post(self, request: Request) -> JSONResponse:
        return JSONResponse({}, status_code=201)

    @documented(summary="list items")
    async def get(self, request: Request) -> JSONResponse:
        return JSONResponse([])


async def socket(websocket) -> None:  # noqa: ANN001
    await websocket.close()


def test_documented_attaches_endpoint_data() -> None:
    data = endpoint_data(plus)

    assert data == EndpointData(tags=("math",), summary="adds numbers")
    assert endpoint_data(plain) is None


def test_documented_route_keeps_method_order() -> None:
    route = DocumentedRoute("/calc", plain, methods=["post", "GET", "POST"])

    (entry,) = compile_routes([route])

    assert list(entry.methods) == ["POST", "GET"]
    assert entry.endpoint is plain


def test_metadata_precedence() -> None:
    route = DocumentedRoute(
        "/plus",
        plus,
        methods=["GET", "POST"],
        docs=EndpointData(summary="route default"),
        method_docs={"post": EndpointData(summary="post only")},
    )

    (entry,) = compile_routes([route])

    assert entry.methods["GET"].summary == "route default"
    assert entry.methods["POST"].summary == "post only"
    assert compile_routes([DocumentedRoute("/plus", plus)])[0].methods["GET"].summary == "adds numbers"


def test_endpoint_class_methods_follow_definition_order() -> None:
    (entry,) = compile_routes([DocumentedRoute("/items", Items)])

    assert list(entry.methods) == ["POST", "GET"]
    assert entry.methods["POST"].summary == "create item"
    assert entry.methods["GET"].summary == "list items"


def test_endpoint_class_methods_can_be_narrowed() -> None:
    (entry,) = compile_routes([DocumentedRoute("/items", Items, methods=["GET"])])

    assert list(entry.methods) == ["GET"]


def test_route_middleware_is_prepended_to_chain() -> None:
    inner = object()
    route = DocumentedRoute(
        "/traced",
        plain,
        docs=EndpointData(middleware=(inner,)),
        middleware=[Middleware(TracingMiddleware)],
    )

    (entry,) = compile_routes([route])
    chain = entry.methods["GET"].middleware

    assert len(chain) == 2
    assert chain[0].cls is TracingMiddleware
    assert chain[1] is inner


def test_documented_accepts_single_tag() -> None:
    @documented(tags="math")
    async def handler(request: Request) -> JSONResponse:
        return JSONResponse({})

    assert endpoint_data(handler).tags == ("math",)


def test_plain_route_to_endpoint_class_uses_handler_methods() -> None:
    (entry,) = compile_routes([Route("/items", Items)])

    assert list(entry.methods) == ["POST", "GET"]
    assert entry.methods["GET"].summary == "list items"
    assert entry.methods["POST"].summary == "create item"
    assert entry.endpoint is Items

    document = assemble({}, [entry])
    assert document["paths"]["/items"]["get"]["summary"] == "list items"


def test_plain_route_to_hidden_endpoint_class_is_excluded() -> None:
    (entry,) = compile_routes([Route("/items", Items, include_in_schema=False)])

    assert all(data.excluded_from_docs for data in entry.methods.values())
    assert assemble({}, [entry])["paths"] == {}


def test_plain_routes_omit_implicit_head() -> None:
    (entry,) = compile_routes([Route("/plain", plain, methods=["GET", "DELETE"])])

    assert list(entry.methods) == ["GET", "DELETE"]
    assert entry.methods["GET"] == EndpointData()


def test_routes_hidden_from_schema_are_excluded() -> None:
    entries = compile_routes(
        [
            Route("/hidden", plain, include_in_schema=False),
            DocumentedRoute("/hidden-too", plus, include_in_schema=False),
        ]
    )

    assert all(data.excluded_from_docs for entry in entries for data in entry.methods.values())


def test_mounts_are_flattened_with_prefixes() -> None:
    routes = [
        DocumentedRoute("/plus", plus),
        Mount(
            "/v1",
            routes=[
                Route("/minus", plain),
                Mount("/{tenant}", routes=[DocumentedRoute("/items", Items)]),
            ],
        ),
        WebSocketRoute("/ws", socket),
    ]

    assert [entry.path for entry in compile_routes(routes)] == [
        "/plus",
        "/v1/minus",
        "/v1/{tenant}/items",
    ]
