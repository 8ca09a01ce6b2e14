"""Assemble a Swagger 2.0 document from a compiled route table."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..utils.logging import increment_counter, scoped_timer
from .endpoint import merge_endpoint
from .identifiers import normalize_ids
from .merge import deep_merge, strip_keys
from .models import OPERATION_KEYS, AssembledDocument, RouteEntry
from .paths import normalize_path
from .selector import is_selected

SWAGGER_VERSION = "2.0"

PathEntry = Tuple[str, Dict[str, Dict[str, Any]]]


def _operations(route: RouteEntry) -> Dict[str, Dict[str, Any]]:
    operations: Dict[str, Dict[str, Any]] = {}
    for method, endpoint in route.methods.items():
        operation = merge_endpoint(method, endpoint)
        if operation is not None:
            operations[method.lower()] = operation
    return operations


def _fold_paths(entries: Iterable[PathEntry]) -> Dict[str, Dict[str, Any]]:
    # Colliding paths are not coalesced: the later method map replaces the
    # earlier one and the key keeps its first position.
    paths: Dict[str, Dict[str, Any]] = {}
    for path, operations in entries:
        paths[path] = operations
    return paths


def assemble(
    skeleton: Optional[Mapping[str, Any]],
    routes: Iterable[RouteEntry],
    *,
    logger: Optional[logging.Logger] = None,
) -> AssembledDocument:
    """Build the document described by ``skeleton`` from ``routes``.

    ``skeleton["id"]`` selects the logical API; routes are kept when their
    identifiers intersect it. Top-level fields come from the skeleton minus the
    per-operation keys. ``paths`` follows route declaration order.
    """

    logger = logger or logging.getLogger("routedoc.docs")
    skeleton = skeleton if isinstance(skeleton, Mapping) else {}
    requested = normalize_ids(skeleton.get("id"))

    base = deep_merge({"swagger": SWAGGER_VERSION}, strip_keys(skeleton, OPERATION_KEYS))
    entries: List[PathEntry] = []
    total = 0
    with scoped_timer(logger, "docs.assemble", extra={"ids": sorted(requested)}):
        for route in routes:
            total += 1
            if not is_selected(route, requested):
                continue
            operations = _operations(route)
            if operations:
                entries.append((normalize_path(route.path), operations))

    document = deep_merge(base, {"paths": _fold_paths(entries)})
    increment_counter("docs.routes", total)
    increment_counter("docs.paths", len(entries))
    logger.debug(
        "docs.assembled",
        extra={"ids": sorted(requested), "routes": total, "paths": len(entries)},
    )
    return AssembledDocument(document, identifiers=requested, entries=entries)


__all__ = ["SWAGGER_VERSION", "assemble"]
