"""Logical API identifiers.

A route or a document request names the API it belongs to with one identifier
or a collection of them. Both forms are normalized to a ``frozenset`` at the
boundary and only sets are handled past this module.
"""
from __future__ import annotations

from typing import Any, FrozenSet

from ..utils.config import DEFAULT_API_ID

IdentifierSet = FrozenSet[str]

DEFAULT_IDS: IdentifierSet = frozenset({DEFAULT_API_ID})


def normalize_ids(value: Any, *, default: IdentifierSet = DEFAULT_IDS) -> IdentifierSet:
    """Normalize a one-or-many identifier into a set.

    ``None``, empty strings and empty collections fall back to ``default``.
    Strings are a single identifier; other iterables are flattened one level.
    Values of any other type are used through ``str()``.
    """

    if value is None:
        return default
    if isinstance(value, str):
        return frozenset({value}) if value else default
    if isinstance(value, (list, tuple, set, frozenset)):
        ids = frozenset(str(item) for item in value if item is not None and item != "")
        return ids or default
    return frozenset({str(value)})


__all__ = ["DEFAULT_IDS", "IdentifierSet", "normalize_ids"]
