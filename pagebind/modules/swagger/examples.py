"""Example synthesis from resolved schemas."""

import copy
import re
from typing import Any, Dict, Optional

from .resolver import is_reference
from .schema import Endpoint, ResponseSchema

PRIMITIVE_EXAMPLES: Dict[str, Any] = {
    "string": "example",
    "number": 0,
    "integer": 0,
    "boolean": False,
}

SUCCESS_STATUS = re.compile(r"^2(\d\d|XX)$", re.IGNORECASE)


def synthesize(schema: Any) -> Any:
    """
    Derive a representative value from a schema.

    Never raises: unknown or missing types give None, and a node still
    carrying $ref is returned as a copy of the reference stub.
    """
    if not isinstance(schema, dict):
        return None

    if is_reference(schema):
        return copy.deepcopy(schema)

    if "example" in schema:
        return schema["example"]

    schema_type = schema.get("type")

    if schema_type == "object" or (schema_type is None and isinstance(schema.get("properties"), dict)):
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return {}
        return {name: synthesize(prop) for name, prop in properties.items()}

    if schema_type == "array":
        return [synthesize(schema.get("items"))]

    if isinstance(schema_type, str):
        return PRIMITIVE_EXAMPLES.get(schema_type)
    return None


def success_response(endpoint: Endpoint) -> Optional[ResponseSchema]:
    """The first declared 2xx response of an endpoint."""
    for status, response in endpoint.responses.items():
        if SUCCESS_STATUS.match(str(status)):
            return response
    return None


def synthesize_response(endpoint: Endpoint) -> Any:
    """Mock data for an endpoint, from its first 2xx response."""
    response = success_response(endpoint)
    if response is None:
        return None
    if response.example is not None:
        return response.example
    if response.response_schema is not None:
        return synthesize(response.response_schema)
    return None


def synthesize_request(endpoint: Endpoint) -> Any:
    """Sample request body for an endpoint, or None when it takes none."""
    if endpoint.request_body is None or endpoint.request_body.body_schema is None:
        return None
    return synthesize(endpoint.request_body.body_schema)
