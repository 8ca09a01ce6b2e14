"""Merge the documentation layers of a single endpoint into one operation."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from starlette.middleware import Middleware

from .merge import deep_merge, merge_all, strip_keys
from .models import DOCUMENT_KEYS, OPENAPI_FRAGMENT, DocFragment, EndpointData

_LOGGER = logging.getLogger("routedoc.docs")


def chain_overrides(item: Any) -> Optional[DocFragment]:
    """Return the ``documentation_overrides`` an interceptor or middleware declares.

    Starlette ``Middleware`` wrappers are unwrapped to the middleware class.
    """

    if isinstance(item, Middleware):
        item = item.cls
    overrides = getattr(item, "documentation_overrides", None)
    if isinstance(overrides, Mapping):
        return overrides
    return None


def _chain_fragment(chain: Iterable[Any]) -> Dict[str, Any]:
    return merge_all(chain_overrides(item) for item in chain)


def _unique_tags(tags: Iterable[Any]) -> List[Any]:
    seen: List[Any] = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return seen


def _annotations(endpoint: EndpointData) -> Dict[str, Any]:
    fragment: Dict[str, Any] = {}
    if endpoint.tags is not None:
        fragment["tags"] = _unique_tags(endpoint.tags)
    if endpoint.summary is not None:
        fragment["summary"] = endpoint.summary
    if endpoint.description is not None:
        fragment["description"] = endpoint.description
    return fragment


def merge_endpoint(method: str, endpoint: Optional[EndpointData]) -> Optional[Dict[str, Any]]:
    """Build the operation object for ``method`` or ``None`` if it is undocumented.

    Layers are merged from the most general to the most specific, later layers
    winning on conflicts: middleware chain, interceptor chain, coercion adapter
    fragment, endpoint tags/summary/description, endpoint overrides.
    Exceptions raised by the coercion adapter propagate to the caller.
    """

    if endpoint is None or endpoint.excluded_from_docs:
        return None

    operation = _chain_fragment(endpoint.middleware)
    operation = deep_merge(operation, _chain_fragment(endpoint.interceptors))
    if endpoint.coercion_adapter is not None:
        fragment = endpoint.coercion_adapter.documentation_fragment(OPENAPI_FRAGMENT, endpoint)
        operation = deep_merge(operation, fragment)
    operation = deep_merge(operation, _annotations(endpoint))
    operation = deep_merge(
        operation, strip_keys(endpoint.documentation_overrides, DOCUMENT_KEYS)
    )
    _LOGGER.debug(
        "docs.endpoint_merged",
        extra={
            "method": method,
            "middleware": len(endpoint.middleware),
            "interceptors": len(endpoint.interceptors),
            "coerced": endpoint.coercion_adapter is not None,
            "keys": sorted(operation),
        },
    )
    return operation


__all__ = ["chain_overrides", "merge_endpoint"]
