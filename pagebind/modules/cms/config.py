from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, model_validator


class CmsType(str, Enum):
    MEMORY = "memory"
    REST = "rest"


class CmsConfig(BaseModel):
    type: CmsType = CmsType.MEMORY
    base_url: Optional[str] = None  # Payload server root, e.g. https://cms.example.com
    # Seed documents for the memory store; mock data when a rest CMS fails
    collections: Dict[str, List[Dict[str, Any]]] = {}

    @model_validator(mode='after')
    def validate_base_url(self) -> 'CmsConfig':
        if self.type == CmsType.REST and not self.base_url:
            raise ValueError("base_url is required for a rest CMS")
        return self
