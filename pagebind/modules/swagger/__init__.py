"""Swagger/OpenAPI support for pagebind."""

from .parser import SpecificationParser, SwaggerParserError, UnsupportedFormatError, parse_specification
from .resolver import ReferenceResolver, is_reference
from .examples import synthesize, synthesize_request, synthesize_response, success_response
from .loader import SpecificationLoader, SpecificationRegistry
from .schema import (
    BodySchema,
    Endpoint,
    HttpMethod,
    Parameter,
    ParameterLocation,
    ParsedSpecification,
    ResponseSchema,
    SpecificationType,
)

__all__ = [
    # Parser
    "SpecificationParser",
    "SwaggerParserError",
    "UnsupportedFormatError",
    "parse_specification",
    "ReferenceResolver",
    "is_reference",

    # Examples
    "synthesize",
    "synthesize_request",
    "synthesize_response",
    "success_response",

    # Loading
    "SpecificationLoader",
    "SpecificationRegistry",

    # Schema
    "BodySchema",
    "Endpoint",
    "HttpMethod",
    "Parameter",
    "ParameterLocation",
    "ParsedSpecification",
    "ResponseSchema",
    "SpecificationType",
]
