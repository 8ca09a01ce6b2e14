"""JSON Schema coercion adapter: Swagger parameters and request validation."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from jsonschema import Draft4Validator
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT4
from starlette.requests import Request

from ..docs.models import OPENAPI_FRAGMENT, EndpointData

LOCATIONS = ("path", "query", "body")

# Schema keywords Swagger 2.0 allows directly on non-body parameters.
_PARAMETER_KEYS = (
    "type",
    "format",
    "items",
    "collectionFormat",
    "default",
    "enum",
    "minimum",
    "maximum",
    "pattern",
    "minLength",
    "maxLength",
    "description",
)


def _registry(schemas: Iterable[Mapping[str, Any]]) -> Registry:
    registry: Registry = Registry()
    for contents in schemas:
        resource = Resource.from_contents(contents, default_specification=DRAFT4)
        # Draft 4 names a schema with "id"; "$id" is accepted too.
        uri = resource.id() or contents.get("$id")
        if uri:
            registry = registry.with_resource(uri, resource)
    return registry


def _status_description(status: str) -> str:
    try:
        return HTTPStatus(int(status)).phrase
    except ValueError:
        return "Response"


def _response_object(status: str, spec: Mapping[str, Any]) -> Dict[str, Any]:
    if "description" in spec:
        return dict(spec)
    return {"description": _status_description(status), "schema": dict(spec)}


class JSONSchemaCoercion:
    """Coercion adapter backed by Draft 4 JSON schemas.

    ``path`` and ``query`` are object schemas whose properties become
    individual parameters; ``body`` is documented as a single body parameter.
    ``responses`` maps status codes to either full response objects or bare
    schemas. ``schemas`` are extra documents that ``$ref`` can point to by id.
    """

    def __init__(
        self,
        *,
        body: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
        path: Optional[Mapping[str, Any]] = None,
        responses: Optional[Mapping[Any, Mapping[str, Any]]] = None,
        consumes: Optional[Sequence[str]] = None,
        produces: Optional[Sequence[str]] = None,
        schemas: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self.schemas: Dict[str, Optional[Mapping[str, Any]]] = {
            "path": path,
            "query": query,
            "body": body,
        }
        self.responses = {str(status): spec for status, spec in (responses or {}).items()}
        self.consumes = list(consumes) if consumes is not None else None
        self.produces = list(produces) if produces is not None else None
        self._registry = _registry(schemas)
        self._validators: Dict[str, Draft4Validator] = {}

    def _object_parameters(self, location: str) -> List[Dict[str, Any]]:
        schema = self.schemas[location]
        if not schema:
            return []
        properties = schema.get("properties") or {}
        required = set(schema.get("required") or ())
        parameters: List[Dict[str, Any]] = []
        for name, prop in properties.items():
            parameter: Dict[str, Any] = {
                "name": name,
                "in": location,
                "required": location == "path" or name in required,
            }
            if isinstance(prop, Mapping):
                parameter.update((key, prop[key]) for key in _PARAMETER_KEYS if key in prop)
            parameters.append(parameter)
        return parameters

    def documentation_fragment(self, kind: str, endpoint: EndpointData) -> Dict[str, Any]:
        if kind != OPENAPI_FRAGMENT:
            return {}
        fragment: Dict[str, Any] = {}
        if self.consumes is not None:
            fragment["consumes"] = list(self.consumes)
        if self.produces is not None:
            fragment["produces"] = list(self.produces)
        parameters = self._object_parameters("path") + self._object_parameters("query")
        body = self.schemas["body"]
        if body:
            parameters.append({"name": "body", "in": "body", "required": True, "schema": dict(body)})
        if parameters:
            fragment["parameters"] = parameters
        if self.responses:
            fragment["responses"] = {
                status: _response_object(status, spec) for status, spec in self.responses.items()
            }
        return fragment

    def _validator(self, location: str) -> Optional[Draft4Validator]:
        if location not in LOCATIONS:
            raise ValueError(f"Unknown parameter location: {location!r}")
        schema = self.schemas[location]
        if not schema:
            return None
        validator = self._validators.get(location)
        if validator is None:
            validator = Draft4Validator(schema, registry=self._registry)
            self._validators[location] = validator
        return validator

    def validate(self, location: str, payload: Any) -> Tuple[bool, List[str]]:
        validator = self._validator(location)
        if validator is None:
            return True, []
        errors = [error.message for error in validator.iter_errors(payload)]
        return not errors, errors

    async def validated_json_body(self, request: Request) -> Any:
        """Parse and validate the request body.

        ``json.JSONDecodeError`` and ``ValueError`` are left to the installed
        error handlers, which render them as ``INVALID_REQUEST``.
        """

        data = await request.json()
        valid, errors = self.validate("body", data)
        if not valid:
            raise ValueError("; ".join(errors))
        return data


__all__ = ["JSONSchemaCoercion", "LOCATIONS"]
