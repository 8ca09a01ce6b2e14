"""Starlette routes that carry per-method documentation metadata."""
from __future__ import annotations

import inspect
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from starlette.endpoints import HTTPEndpoint
from starlette.middleware import Middleware
from starlette.routing import BaseRoute, Mount, Route

from ..docs.models import EndpointData, RouteEntry

ENDPOINT_ATTR = "__routedoc__"

_METHOD_ORDER = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE")


def documented(**fields: Any) -> Callable[[Any], Any]:
    """Attach :class:`EndpointData` to a handler.

    Accepts the ``EndpointData`` field names; ``tags`` may be a single string
    or any iterable of strings.
    """

    tags = fields.get("tags")
    if isinstance(tags, str):
        fields["tags"] = (tags,)
    elif tags is not None:
        fields["tags"] = tuple(tags)
    for chain in ("middleware", "interceptors"):
        if chain in fields:
            fields[chain] = tuple(fields[chain])
    data = EndpointData(**fields)

    def decorator(handler: Any) -> Any:
        setattr(handler, ENDPOINT_ATTR, data)
        return handler

    return decorator


def endpoint_data(handler: Any) -> Optional[EndpointData]:
    data = getattr(handler, ENDPOINT_ATTR, None)
    return data if isinstance(data, EndpointData) else None


def _is_endpoint_class(endpoint: Any) -> bool:
    return inspect.isclass(endpoint) and issubclass(endpoint, HTTPEndpoint)


def _class_methods(endpoint: type) -> List[str]:
    # Definition order, base classes first.
    found: List[str] = []
    for klass in reversed(endpoint.__mro__):
        for name, value in vars(klass).items():
            method = name.upper()
            if name.islower() and method in _METHOD_ORDER and callable(value) and method not in found:
                found.append(method)
    return found


def _unique_upper(methods: Iterable[str]) -> List[str]:
    ordered: List[str] = []
    for method in methods:
        method = method.upper()
        if method not in ordered:
            ordered.append(method)
    return ordered


def _method_table(
    endpoint: Any,
    methods: Optional[Sequence[str]],
    docs: Optional[EndpointData],
    method_docs: Mapping[str, EndpointData],
) -> Dict[str, EndpointData]:
    declared = {key.upper(): value for key, value in method_docs.items()}
    table: Dict[str, EndpointData] = {}
    if _is_endpoint_class(endpoint):
        available = _class_methods(endpoint)
        order = [m for m in _unique_upper(methods) if m in available] if methods else available
        for method in order:
            handler = getattr(endpoint, method.lower())
            table[method] = (
                declared.get(method) or endpoint_data(handler) or docs or endpoint_data(endpoint) or EndpointData()
            )
        return table

    for method in _unique_upper(methods or ("GET",)):
        table[method] = declared.get(method) or docs or endpoint_data(endpoint) or EndpointData()
    return table


class DocumentedRoute(Route):
    """A Starlette :class:`Route` that keeps documentation per method.

    Methods keep their declaration order. For :class:`HTTPEndpoint` classes the
    handler definitions decide the methods unless ``methods`` narrows them.
    ``method_docs`` always wins. Function endpoints then use ``docs`` before
    their :func:`documented` data; endpoint classes use each handler's
    :func:`documented` data before ``docs``.
    """

    def __init__(
        self,
        path: str,
        endpoint: Callable[..., Any],
        *,
        methods: Optional[Sequence[str]] = None,
        docs: Optional[EndpointData] = None,
        method_docs: Optional[Mapping[str, EndpointData]] = None,
        name: Optional[str] = None,
        include_in_schema: bool = True,
        middleware: Optional[Sequence[Middleware]] = None,
    ) -> None:
        super().__init__(
            path,
            endpoint,
            methods=methods,
            name=name,
            include_in_schema=include_in_schema,
            middleware=middleware,
        )
        self.route_middleware = tuple(middleware or ())
        self.method_table = _method_table(endpoint, methods, docs, method_docs or {})

    def entry(self, prefix: str = "") -> RouteEntry:
        methods: Dict[str, EndpointData] = {}
        for method, data in self.method_table.items():
            data = data.with_chains(middleware=self.route_middleware)
            if not self.include_in_schema:
                data = replace(data, excluded_from_docs=True)
            methods[method] = data
        return RouteEntry(path=prefix + self.path, methods=methods, endpoint=self.endpoint)


def _method_rank(method: str) -> tuple[int, str]:
    if method in _METHOD_ORDER:
        return _METHOD_ORDER.index(method), method
    return len(_METHOD_ORDER), method


def _plain_methods(route: Route) -> List[str]:
    methods = sorted(route.methods or (), key=_method_rank)
    if "GET" in methods and "HEAD" in methods:
        # Starlette adds HEAD for every GET route.
        methods.remove("HEAD")
    return methods


def _plain_entry(route: Route, prefix: str) -> Optional[RouteEntry]:
    methods = _plain_methods(route)
    if _is_endpoint_class(route.endpoint):
        table = _method_table(route.endpoint, methods or None, None, {})
    else:
        data = endpoint_data(route.endpoint) or EndpointData()
        table = {method: data for method in methods}
    if not table:
        return None
    if not route.include_in_schema:
        table = {method: replace(data, excluded_from_docs=True) for method, data in table.items()}
    return RouteEntry(path=prefix + route.path, methods=table, endpoint=route.endpoint)


def compile_routes(routes: Iterable[BaseRoute], *, prefix: str = "") -> List[RouteEntry]:
    """Flatten Starlette routes into :class:`RouteEntry` records in declaration order.

    ``Mount`` prefixes are concatenated; websocket and host routes are skipped.
    """

    entries: List[RouteEntry] = []
    for route in routes:
        if isinstance(route, DocumentedRoute):
            entries.append(route.entry(prefix))
        elif isinstance(route, Route):
            entry = _plain_entry(route, prefix)
            if entry is not None:
                entries.append(entry)
        elif isinstance(route, Mount):
            entries.extend(compile_routes(route.routes, prefix=prefix + route.path))
    return entries


__all__ = [
    "DocumentedRoute",
    "ENDPOINT_ATTR",
    "compile_routes",
    "documented",
    "endpoint_data",
]
