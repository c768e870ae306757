import copy
import math
from typing import Any, Callable, Dict, List, Optional

from .base import CmsClient, DocumentNotFoundError, FindResult


def _get_field(document: Dict[str, Any], field: str) -> Any:
    current: Any = document
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [v.strip() for v in value.split(",")]
    return [value]


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(actual: Any, expected: Any) -> bool:
        if actual is None or expected is None:
            return False
        try:
            return op(actual, expected)
        except TypeError:
            return False
    return check


OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "equals": lambda actual, expected: actual == expected,
    "not_equals": lambda actual, expected: actual != expected,
    "in": lambda actual, expected: actual in _as_list(expected),
    "not_in": lambda actual, expected: actual not in _as_list(expected),
    "greater_than": _compare(lambda a, e: a > e),
    "greater_than_equal": _compare(lambda a, e: a >= e),
    "less_than": _compare(lambda a, e: a < e),
    "less_than_equal": _compare(lambda a, e: a <= e),
    "like": lambda actual, expected: isinstance(actual, str) and all(
        word in actual.lower() for word in str(expected).lower().split()
    ),
    "contains": lambda actual, expected: (
        str(expected).lower() in actual.lower() if isinstance(actual, str)
        else isinstance(actual, list) and expected in actual
    ),
    "exists": lambda actual, expected: (actual is not None) == bool(expected),
}


def matches(document: Dict[str, Any], where: Optional[Dict[str, Any]]) -> bool:
    """Evaluate a Payload-style where clause against one document."""
    if not where:
        return True

    for key, condition in where.items():
        if key == "and":
            if not all(matches(document, clause) for clause in condition):
                return False
        elif key == "or":
            if not any(matches(document, clause) for clause in condition):
                return False
        else:
            actual = _get_field(document, key)
            if not isinstance(condition, dict):
                condition = {"equals": condition}
            for operator, expected in condition.items():
                check = OPERATORS.get(operator)
                if check is None:
                    raise ValueError(f"Unsupported where operator: {operator}")
                if not check(actual, expected):
                    return False
    return True


def _sort_documents(documents: List[Dict[str, Any]], sort: Optional[str]) -> List[Dict[str, Any]]:
    if not sort:
        return documents
    descending = sort.startswith("-")
    field = sort.lstrip("-")
    present = [d for d in documents if _get_field(d, field) is not None]
    missing = [d for d in documents if _get_field(d, field) is None]
    return sorted(present, key=lambda d: _get_field(d, field), reverse=descending) + missing


class InMemoryCmsClient(CmsClient):
    """CMS client over in-process documents, used for previews and tests."""

    def __init__(self, collections: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.collections: Dict[str, List[Dict[str, Any]]] = {
            slug: list(docs) for slug, docs in (collections or {}).items()
        }

    async def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        limit: int = 10,
        page: int = 1,
        sort: Optional[str] = None
    ) -> FindResult:
        documents = [d for d in self.collections.get(collection, []) if matches(d, where)]
        documents = _sort_documents(documents, sort)

        total = len(documents)
        limit = max(1, limit)
        total_pages = math.ceil(total / limit)
        page = min(max(1, page), total_pages or 1)
        start = (page - 1) * limit

        return FindResult(
            docs=copy.deepcopy(documents[start:start + limit]),
            total_docs=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            page=page,
            limit=limit,
        )

    async def find_by_id(self, collection: str, document_id: str) -> Dict[str, Any]:
        for document in self.collections.get(collection, []):
            if str(document.get("id")) == str(document_id):
                return copy.deepcopy(document)
        raise DocumentNotFoundError(collection, document_id)
