"""
NodeArena - append-only, index-addressed store that owns every Segment.

Everything else refers to segments by their integer index. A segment may be
read by anyone unless it is currently checked out for writing, and at most
one writer may hold it at a time.
"""

from contextlib import contextmanager
from typing import Iterator, List, Set, Tuple

from .config import GrowthConfig
from .segment import Segment
from .vector import Vector2D


class InvariantViolation(RuntimeError):
    """Raised on conflicting segment access or a dangling child index."""


class NodeArena:
    def __init__(self, config: GrowthConfig, rng):
        self.config = config
        self.rng = rng
        self._segments: List[Segment] = []
        self._writing: Set[int] = set()

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def next_index(self) -> int:
        return len(self._segments)

    def create(self, start: Vector2D, end: Vector2D, depth: int) -> int:
        """Append a new segment with randomized parameters and return its index."""
        segment = Segment.random(start, end, depth, self.rng, self.config)
        self._segments.append(segment)
        return len(self._segments) - 1

    def _check_index(self, index: int):
        if not 0 <= index < len(self._segments):
            raise InvariantViolation(
                f"Segment index {index} does not exist (arena holds {len(self._segments)})"
            )

    def read(self, index: int) -> Segment:
        self._check_index(index)
        if index in self._writing:
            raise InvariantViolation(f"Segment {index} read while held for writing")
        return self._segments[index]

    @contextmanager
    def write(self, index: int) -> Iterator[Segment]:
        self._check_index(index)
        if index in self._writing:
            raise InvariantViolation(f"Segment {index} already held for writing")
        self._writing.add(index)
        try:
            yield self._segments[index]
        finally:
            self._writing.discard(index)

    def children_of(self, index: int) -> Tuple[int, ...]:
        return tuple(self.read(index).children)

    def walk(self, root: int = 0) -> Iterator[int]:
        """Yield indices reachable from root in pre-order, children in append order."""
        stack = [root]
        while stack:
            index = stack.pop()
            yield index
            stack.extend(reversed(self.children_of(index)))

    def segments(self) -> List[Segment]:
        return list(self._segments)
