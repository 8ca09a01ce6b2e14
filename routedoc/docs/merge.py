"""Deep merge of documentation fragments."""
from __future__ import annotations

from typing import Any, Collection, Dict, Iterable, Mapping, Optional


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    return value


def deep_merge(base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge ``override`` on top of ``base`` and return a new dict.

    Mapping over mapping recurses; any other pair of values (lists included) is
    replaced wholesale by the value from ``override``. Neither input is mutated.
    Non-mapping arguments are treated as empty fragments.
    """

    merged: Dict[str, Any] = _copy(base) if isinstance(base, Mapping) else {}
    if not isinstance(override, Mapping):
        return merged
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy(value)
    return merged


def merge_all(fragments: Iterable[Optional[Mapping[str, Any]]]) -> Dict[str, Any]:
    """Fold ``fragments`` left to right with :func:`deep_merge`."""

    merged: Dict[str, Any] = {}
    for fragment in fragments:
        if fragment is None:
            continue
        merged = deep_merge(merged, fragment)
    return merged


def strip_keys(fragment: Optional[Mapping[str, Any]], keys: Collection[str]) -> Dict[str, Any]:
    """Return a shallow copy of ``fragment`` without ``keys``."""

    if not isinstance(fragment, Mapping):
        return {}
    return {key: value for key, value in fragment.items() if key not in keys}


__all__ = ["deep_merge", "merge_all", "strip_keys"]
