"""Source descriptors and resolution results."""

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QueryMode(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


class CollectionSource(BaseModel):
    """A CMS collection query."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    slug: str
    query_mode: QueryMode = QueryMode.MULTIPLE
    document_id: Optional[str] = None
    where_conditions: Optional[Dict[str, Any]] = None
    limit: int = Field(10, ge=1)
    page: int = Field(1, ge=1)
    sort: Optional[str] = None

    def describe(self) -> str:
        if self.query_mode == QueryMode.SINGLE:
            return f"{self.slug}/{self.document_id or '?'}"
        return self.slug


class ApiSource(BaseModel):
    """An endpoint of a registered Swagger/OpenAPI specification."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["api"] = "api"
    specification: str
    endpoint_id: str
    parameters: Dict[str, Any] = {}
    headers: Optional[Dict[str, str]] = None
    body: Optional[Any] = None

    @model_validator(mode='after')
    def validate_endpoint_id(self) -> 'ApiSource':
        if " " not in self.endpoint_id.strip():
            raise ValueError("endpoint_id must look like '<METHOD> <path>', e.g. 'GET /products'")
        return self

    def describe(self) -> str:
        return f"{self.specification}: {self.endpoint_id}"


SourceDescriptor = Annotated[Union[CollectionSource, ApiSource], Field(discriminator="kind")]


class Pagination(BaseModel):
    total_docs: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False
    page: int = 1
    limit: int = 10


class ResolvedData(BaseModel):
    """The outcome of one resolution pass for a source descriptor."""
    value: Any = None
    is_array: bool = False
    pagination: Optional[Pagination] = None
    synthesized: bool = False  # True when the value was derived from a schema

    @classmethod
    def of(cls, value: Any, **kwargs: Any) -> 'ResolvedData':
        return cls(value=value, is_array=isinstance(value, list), **kwargs)

    @classmethod
    def empty(cls) -> 'ResolvedData':
        return cls(value=None, is_array=False)
