"""Document synthesis: selection, merging, and assembly of route metadata."""

from .assembler import SWAGGER_VERSION, assemble
from .endpoint import merge_endpoint
from .identifiers import DEFAULT_IDS, normalize_ids
from .merge import deep_merge, merge_all, strip_keys
from .models import (
    DOCUMENT_KEYS,
    OPENAPI_FRAGMENT,
    OPERATION_KEYS,
    AssembledDocument,
    CoercionAdapter,
    EndpointData,
    RouteEntry,
)
from .paths import normalize_path
from .selector import is_selected, route_ids

__all__ = [
    "AssembledDocument",
    "CoercionAdapter",
    "DEFAULT_IDS",
    "DOCUMENT_KEYS",
    "EndpointData",
    "OPENAPI_FRAGMENT",
    "OPERATION_KEYS",
    "RouteEntry",
    "SWAGGER_VERSION",
    "assemble",
    "deep_merge",
    "is_selected",
    "merge_all",
    "merge_endpoint",
    "normalize_ids",
    "normalize_path",
    "route_ids",
    "strip_keys",
]
