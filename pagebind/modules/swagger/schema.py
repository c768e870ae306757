"""Data models for parsed Swagger/OpenAPI specifications."""

from enum import Enum
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field


class SpecificationType(str, Enum):
    """Supported Swagger/OpenAPI specification types."""
    SWAGGER_2 = "swagger_2"
    OPENAPI_3 = "openapi_3"


class HttpMethod(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class ParameterLocation(str, Enum):
    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    BODY = "body"


class Parameter(BaseModel):
    """Parameter for an endpoint."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: ParameterLocation
    required: bool = False
    type: str = "string"  # e.g. "integer" or "array<string>"
    description: Optional[str] = None
    default: Optional[Any] = None
    enum: Optional[List[Any]] = None
    param_schema: Optional[Dict[str, Any]] = Field(None, alias="schema")


class BodySchema(BaseModel):
    """Request body of an endpoint."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    required: bool = False
    content_type: str = "application/json"
    body_schema: Optional[Dict[str, Any]] = Field(None, alias="schema")


class ResponseSchema(BaseModel):
    """One declared response of an endpoint."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str = ""
    response_schema: Optional[Dict[str, Any]] = Field(None, alias="schema")
    example: Optional[Any] = None


class Endpoint(BaseModel):
    """Endpoint from a Swagger/OpenAPI specification."""
    model_config = ConfigDict(frozen=True)

    id: str
    path: str
    method: HttpMethod
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Parameter] = []
    request_body: Optional[BodySchema] = None
    responses: Dict[str, ResponseSchema] = {}

    def parameters_in(self, location: ParameterLocation) -> List[Parameter]:
        """Parameters declared for the given location, in declaration order."""
        return [p for p in self.parameters if p.location == location]


class ParsedSpecification(BaseModel):
    """Parsed Swagger/OpenAPI specification."""
    model_config = ConfigDict(frozen=True)

    title: str = "API"
    version: str = "1.0"
    base_url: Optional[str] = None
    spec_type: SpecificationType
    endpoints: List[Endpoint] = []

    def find_endpoint(self, endpoint_id: str) -> Optional[Endpoint]:
        """Find an endpoint by its "<METHOD> <path>" id."""
        for endpoint in self.endpoints:
            if endpoint.id == endpoint_id:
                return endpoint
        return None

    def endpoints_by_method(self, method: Optional[str] = None) -> List[Endpoint]:
        """List endpoints, optionally filtered by HTTP method."""
        if not method:
            return list(self.endpoints)
        return [e for e in self.endpoints if e.method.value == method.lower()]
