from typing import Any, Dict, Optional
from urllib.parse import quote

from ..request.errors import HttpStatusError
from ..request.http_client import HttpClient, HttpRequestSpec
from .base import CmsClient, CmsError, DocumentNotFoundError, FindResult


def encode_where(where: Any, prefix: str = "where") -> Dict[str, str]:
    """Flatten a where clause into Payload's bracketed query-string keys.

    {"price": {"less_than": 10}} -> {"where[price][less_than]": "10"}
    """
    encoded: Dict[str, str] = {}
    if isinstance(where, dict):
        for key, value in where.items():
            encoded.update(encode_where(value, f"{prefix}[{key}]"))
    elif isinstance(where, list):
        for index, value in enumerate(where):
            encoded.update(encode_where(value, f"{prefix}[{index}]"))
    elif isinstance(where, bool):
        encoded[prefix] = "true" if where else "false"
    elif where is not None:
        encoded[prefix] = str(where)
    return encoded


class RestCmsClient(CmsClient):
    """Reads collections through a Payload CMS REST API."""

    def __init__(self, base_url: str, http: HttpClient):
        self.base_url = base_url.rstrip("/")
        self.http = http

    def _collection_url(self, collection: str) -> str:
        return f"{self.base_url}/api/{quote(collection, safe='')}"

    async def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        limit: int = 10,
        page: int = 1,
        sort: Optional[str] = None
    ) -> FindResult:
        query: Dict[str, Any] = {"limit": limit, "page": page, **encode_where(where or {})}
        if sort:
            query["sort"] = sort

        response = await self.http.request(
            HttpRequestSpec(url=self._collection_url(collection), method="GET", query=query)
        )
        body = response.body
        if not isinstance(body, dict) or not isinstance(body.get("docs"), list):
            raise CmsError(f"Unexpected response for collection '{collection}'")

        return FindResult(
            docs=body["docs"],
            total_docs=body.get("totalDocs", len(body["docs"])),
            has_next_page=bool(body.get("hasNextPage", False)),
            has_prev_page=bool(body.get("hasPrevPage", False)),
            page=body.get("page") or page,
            limit=body.get("limit") or limit,
        )

    async def find_by_id(self, collection: str, document_id: str) -> Dict[str, Any]:
        url = f"{self._collection_url(collection)}/{quote(str(document_id), safe='')}"
        try:
            response = await self.http.request(HttpRequestSpec(url=url, method="GET"))
        except HttpStatusError as e:
            if e.status == 404:
                raise DocumentNotFoundError(collection, document_id)
            raise
        if not isinstance(response.body, dict):
            raise DocumentNotFoundError(collection, document_id)
        return response.body
