from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class CmsError(Exception):
    """Error raised by a CMS client."""
    pass


class DocumentNotFoundError(CmsError):
    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found in collection '{collection}'")


class FindResult(BaseModel):
    """One page of documents, in the shape Payload returns."""
    docs: List[Dict[str, Any]] = []
    total_docs: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False
    page: int = 1
    limit: int = 10


class CmsClient(ABC):
    """Contract for the CMS document store."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        limit: int = 10,
        page: int = 1,
        sort: Optional[str] = None
    ) -> FindResult:
        """Query a collection."""
        pass

    @abstractmethod
    async def find_by_id(self, collection: str, document_id: str) -> Dict[str, Any]:
        """
        Fetch one document.

        Raises:
            DocumentNotFoundError: If the collection has no such document
        """
        pass

    async def close(self) -> None:
        pass
