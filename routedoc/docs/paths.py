"""Rewrite router path templates into Swagger brace templates."""
from __future__ import annotations

import re

# {name}, {name:converter} and {*name}
_BRACE_SEGMENT = re.compile(r"^\{\*?(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::[^{}]*)?\}$")
# :name and *name
_PREFIX_SEGMENT = re.compile(r"^[:*](?P<name>[A-Za-z_][A-Za-z0-9_]*)$")


def _normalize_segment(segment: str) -> str:
    match = _BRACE_SEGMENT.match(segment) or _PREFIX_SEGMENT.match(segment)
    if match is None:
        return segment
    return "{" + match.group("name") + "}"


def normalize_path(path: str) -> str:
    """Convert ``path`` to the ``/users/{id}`` form used in ``paths``.

    Examples::

        "/files/{*rest}"      -> "/files/{rest}"
        "/files/{rest:path}"  -> "/files/{rest}"
        "/users/:id"          -> "/users/{id}"
        "/users/{id:int}"     -> "/users/{id}"

    Segments that match none of the known forms are kept as they are.
    """

    return "/".join(_normalize_segment(segment) for segment in path.split("/"))


__all__ = ["normalize_path"]
