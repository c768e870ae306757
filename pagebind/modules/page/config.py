from typing import Any, Dict, List, Optional

from pydantic import BaseModel, model_validator

from ..cms.config import CmsConfig
from ..request.http_client import HttpClientConfig


class SpecificationConfig(BaseModel):
    name: str
    source: Optional[str] = None  # Local path or URL of the document
    document: Optional[Dict[str, Any]] = None  # Inline document

    @model_validator(mode='after')
    def validate_sources(self) -> 'SpecificationConfig':
        """Validate that exactly one document source is specified."""
        if (self.source is None) == (self.document is None):
            raise ValueError(f"Specification '{self.name}' needs exactly one of 'source' or 'document'")
        return self


class PageBindConfig(BaseModel):
    http: HttpClientConfig = HttpClientConfig()
    cms: CmsConfig = CmsConfig()
    specifications: List[SpecificationConfig] = []
