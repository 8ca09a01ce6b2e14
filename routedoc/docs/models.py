"""Route and endpoint documentation records consumed by the assembler."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .identifiers import IdentifierSet, normalize_ids

DocFragment = Mapping[str, Any]

OPENAPI_FRAGMENT = "openapi-fragment"

# Keys that only make sense on the document itself, never on an operation.
DOCUMENT_KEYS: FrozenSet[str] = frozenset(
    {"id", "info", "host", "basePath", "definitions", "securityDefinitions"}
)
# Keys that only make sense on an operation, never at the top level.
OPERATION_KEYS: FrozenSet[str] = frozenset(
    {"id", "parameters", "responses", "summary", "description"}
)


@runtime_checkable
class CoercionAdapter(Protocol):
    """Produces the documentation fragment for an endpoint's declared schemas."""

    def documentation_fragment(self, kind: str, endpoint: "EndpointData") -> DocFragment:
        ...


@dataclass(frozen=True)
class EndpointData:
    """Documentation metadata declared for one (route, method) pair.

    ``middleware`` and ``interceptors`` hold chain items in execution order.
    Any object works as an item; only its ``documentation_overrides`` attribute
    is read.
    """

    documentation_overrides: Optional[DocFragment] = None
    excluded_from_docs: bool = False
    tags: Optional[Tuple[str, ...]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    coercion_adapter: Optional[CoercionAdapter] = None
    middleware: Tuple[Any, ...] = ()
    interceptors: Tuple[Any, ...] = ()

    def with_chains(
        self,
        *,
        middleware: Iterable[Any] = (),
        interceptors: Iterable[Any] = (),
    ) -> "EndpointData":
        """Return a copy with outer chain items placed before the declared ones."""

        middleware = tuple(middleware)
        interceptors = tuple(interceptors)
        if not middleware and not interceptors:
            return self
        return replace(
            self,
            middleware=middleware + self.middleware,
            interceptors=interceptors + self.interceptors,
        )

    @property
    def declared_ids(self) -> Optional[Any]:
        overrides = self.documentation_overrides
        if isinstance(overrides, Mapping):
            return overrides.get("id")
        return None


@dataclass(frozen=True)
class RouteEntry:
    """One compiled route: a path template and its per-method metadata."""

    path: str
    methods: Mapping[str, Optional[EndpointData]] = field(default_factory=dict)
    endpoint: Any = None


class AssembledDocument(dict):
    """The wire document plus the identifiers it was assembled for.

    ``entries`` keeps every ``(path, operations)`` pair in route order, including
    routes whose normalized paths collide in ``paths``.
    """

    def __init__(
        self,
        content: Mapping[str, Any],
        *,
        identifiers: IdentifierSet,
        entries: Optional[List[Tuple[str, Dict[str, Any]]]] = None,
    ) -> None:
        super().__init__(content)
        self.identifiers = identifiers
        self.entries = list(entries or [])


def endpoint_ids(endpoint: Optional[EndpointData]) -> Optional[IdentifierSet]:
    if endpoint is None:
        return None
    declared = endpoint.declared_ids
    if declared is None:
        return None
    return normalize_ids(declared, default=frozenset())


__all__ = [
    "AssembledDocument",
    "CoercionAdapter",
    "DOCUMENT_KEYS",
    "DocFragment",
    "EndpointData",
    "OPENAPI_FRAGMENT",
    "OPERATION_KEYS",
    "RouteEntry",
    "endpoint_ids",
]
