"""$ref resolution against the root specification document."""

import copy
from typing import Any, Dict, FrozenSet, Optional

from ..logging import BaseLogger

REF_KEY = "$ref"


def is_reference(node: Any) -> bool:
    """True for a mapping that still carries a $ref pointer string."""
    return isinstance(node, dict) and isinstance(node.get(REF_KEY), str)


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


class ReferenceResolver:
    """Resolves local JSON references ("#/a/b/c") in a specification document.

    Unresolvable references come back as a copy of the original node, so
    callers can recognize them by the $ref key and skip deeper processing.
    A reference that is already being resolved higher up the same branch is
    left unresolved as well, which keeps cyclic schemas finite.
    """

    def __init__(self, document: Dict[str, Any], logger: Optional[BaseLogger] = None):
        self.document = document
        self.logger = logger

    def lookup(self, ref: str) -> Optional[Any]:
        """Walk the document along a "#/..." pointer; None when any step is missing."""
        if not isinstance(ref, str) or not ref.startswith("#"):
            return None

        current: Any = self.document
        for part in ref.split("/")[1:]:
            key = _unescape(part)
            if isinstance(current, dict) and key in current:
                current = current[key]
            elif isinstance(current, list) and key.isascii() and key.isdigit() and int(key) < len(current):
                current = current[int(key)]
            else:
                return None
        return current

    def resolve(self, node: Any) -> Any:
        """Resolve a single (possibly chained) reference node."""
        return self._resolve_node(node, frozenset())[0]

    def resolve_deep(self, node: Any) -> Any:
        """Return a copy of node with every resolvable $ref inlined."""
        return self._walk(node, frozenset())

    def _resolve_node(self, node: Any, visiting: FrozenSet[str]):
        while is_reference(node):
            ref = node[REF_KEY]
            if ref in visiting:
                return copy.deepcopy(node), visiting
            target = self.lookup(ref)
            if target is None:
                if self.logger:
                    self.logger.log_debug(f"Unresolved reference: {ref}")
                return copy.deepcopy(node), visiting
            visiting = visiting | {ref}
            node = target
        return node, visiting

    def _walk(self, node: Any, visiting: FrozenSet[str]) -> Any:
        node, visiting = self._resolve_node(node, visiting)
        if is_reference(node):
            return node
        if isinstance(node, dict):
            return {key: self._walk_member(key, value, visiting) for key, value in node.items()}
        if isinstance(node, list):
            return [self._walk(item, visiting) for item in node]
        return node

    def _walk_member(self, key: str, value: Any, visiting: FrozenSet[str]) -> Any:
        # A properties map is keyed by property name, so a property called
        # "$ref" must not turn the map itself into a reference.
        if key == "properties" and isinstance(value, dict):
            return {name: self._walk(prop, visiting) for name, prop in value.items()}
        return self._walk(value, visiting)
