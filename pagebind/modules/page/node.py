from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..source.descriptor import SourceDescriptor
from .config import PageBindConfig


class NodeType(str, Enum):
    TEXT = "text"
    GROUP = "group"
    DATA = "data"


class BindingMode(str, Enum):
    AUTO = "auto"      # repeat for arrays, single otherwise
    SINGLE = "single"
    REPEAT = "repeat"
    INDEX = "index"


class DataBinding(BaseModel):
    """Where a data node gets its value and how it exposes it to children."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    as_: str = Field(..., alias="as")
    source: Optional[SourceDescriptor] = None
    path: Optional[str] = None  # Dotted path into the enclosing scope
    mode: BindingMode = BindingMode.AUTO
    selected_index: int = 0
    max_items: int = Field(0, ge=0)  # 0 = unlimited

    @model_validator(mode='after')
    def validate_data_sources(self) -> 'DataBinding':
        """Validate that exactly one data origin is specified."""
        if (self.source is None) == (self.path is None):
            raise ValueError("A binding needs exactly one of 'source' or 'path'")
        if not self.as_ or "." in self.as_:
            raise ValueError(f"Invalid binding name: '{self.as_}'")
        return self


class PageNode(BaseModel):
    type: NodeType = NodeType.GROUP
    text: Optional[str] = None
    binding: Optional[DataBinding] = None
    children: List['PageNode'] = []

    @model_validator(mode='after')
    def validate_node(self) -> 'PageNode':
        if self.type == NodeType.TEXT and self.text is None:
            raise ValueError("A text node needs 'text'")
        if self.type == NodeType.DATA and self.binding is None:
            raise ValueError("A data node needs 'binding'")
        return self


class PageDefinition(BaseModel):
    config: PageBindConfig = PageBindConfig()
    data: Dict[str, Any] = {}  # Root frames, visible to the whole page
    root: PageNode


PageNode.model_rebuild()
