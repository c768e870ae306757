"""Name-scoped data visible to a render subtree."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union


class _Missing:
    """Marker for a lookup that found nothing (distinct from JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

INDEX_NAME = "index"


@dataclass(frozen=True)
class ScopeFrame:
    """A named binding of a value, visible to one subtree."""
    name: str
    value: Any
    index: Optional[int] = None
    is_repeating: bool = False


@dataclass(frozen=True)
class NoItemAtIndex:
    """Index selection found no element at the requested position."""
    index: int
    length: int


def descend(value: Any, segments: Iterable[str]) -> Any:
    """Follow object keys / list indexes; MISSING at the first missing link."""
    current = value
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, list):
            if not (segment.isascii() and segment.isdigit()):
                return MISSING
            position = int(segment)
            if position >= len(current):
                return MISSING
            current = current[position]
        else:
            return MISSING
    return current


class DataScopeStack:
    """A stack of named frames; the innermost frame with a name shadows the rest.

    A stack belongs to one render path. Sibling subtrees that evaluate
    concurrently each work on their own fork().
    """

    def __init__(self, frames: Iterable[ScopeFrame] = ()):
        self._frames: List[ScopeFrame] = list(frames)

    @property
    def frames(self) -> List[ScopeFrame]:
        return list(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, frame: ScopeFrame) -> None:
        self._frames.append(frame)

    def pop(self) -> ScopeFrame:
        if not self._frames:
            raise IndexError("pop from an empty scope stack")
        return self._frames.pop()

    @contextmanager
    def frame(self, frame: ScopeFrame) -> Iterator['DataScopeStack']:
        """Push frame for the duration of a block; popped on every exit path."""
        depth = len(self._frames)
        self.push(frame)
        try:
            yield self
        finally:
            del self._frames[depth:]

    def fork(self) -> 'DataScopeStack':
        return DataScopeStack(self._frames)

    def find(self, name: str) -> Optional[ScopeFrame]:
        for frame in reversed(self._frames):
            if frame.name == name:
                return frame
        return None

    def lookup(self, path: str) -> Any:
        """
        Resolve a dotted path such as "product.price" or "items.0.name".

        Returns:
            The value, or MISSING when any link is absent. Never raises.
        """
        if not isinstance(path, str) or not path.strip():
            return MISSING

        head, *rest = path.strip().split(".")
        frame = self.find(head)
        if frame is not None:
            return descend(frame.value, rest)

        if head == INDEX_NAME and not rest:
            for candidate in reversed(self._frames):
                if candidate.index is not None:
                    return candidate.index
        return MISSING

    def as_dict(self) -> Dict[str, Any]:
        """Merged view of visible names, innermost wins."""
        merged: Dict[str, Any] = {}
        for frame in self._frames:
            merged[frame.name] = frame.value
        return merged


def iterate_frames(name: str, items: List[Any]) -> Iterator[ScopeFrame]:
    """One repeating frame per element, in array order."""
    for position, item in enumerate(items):
        yield ScopeFrame(name=name, value=item, index=position, is_repeating=True)


def select_index(name: str, items: List[Any], index: int) -> Union[ScopeFrame, NoItemAtIndex]:
    """The frame for items[index], or NoItemAtIndex when out of range."""
    if not isinstance(index, int) or index < 0 or index >= len(items):
        return NoItemAtIndex(index=index, length=len(items))
    return ScopeFrame(name=name, value=items[index], index=index)
