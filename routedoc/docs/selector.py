"""Decide which routes belong to a requested logical API."""
from __future__ import annotations

from typing import Any

from .identifiers import DEFAULT_IDS, IdentifierSet, normalize_ids
from .models import RouteEntry, endpoint_ids


def route_ids(route: RouteEntry) -> IdentifierSet:
    """Identifiers declared by any method of ``route``; the default set if none."""

    declared: IdentifierSet = frozenset()
    for endpoint in route.methods.values():
        ids = endpoint_ids(endpoint)
        if ids:
            declared = declared | ids
    return declared or DEFAULT_IDS


def is_selected(route: RouteEntry, requested: Any) -> bool:
    return bool(route_ids(route) & normalize_ids(requested))


__all__ = ["is_selected", "route_ids"]
