"""
Spatial index over segment bounding rectangles for intersection queries.

Entries are never removed. They are kept in a logarithmic set of static
blocks whose sizes are distinct powers of two; inserting merges equal-sized
blocks, so each entry is rebuilt O(log n) times. Blocks above `leaf_size`
carry a cKDTree over rectangle centres. A rectangle overlaps the query only
if its centre lies within (query half-extent + its own half-extent) of the
query centre on both axes, so a Chebyshev ball query with the block's
largest half-extent finds every overlap and possibly a few extras.
"""

from typing import List, Optional, Set, Tuple

import numpy as np
from scipy.spatial import cKDTree

from .vector import Rect

_RADIUS_PAD = 1e-12


class _Block:
    __slots__ = ('rects', 'indices', 'max_half_extent', 'tree')

    def __init__(self, rects: np.ndarray, indices: np.ndarray, leaf_size: int):
        self.rects = rects
        self.indices = indices
        half = (rects[:, 2:] - rects[:, :2]) * 0.5
        self.max_half_extent = float(half.max()) if len(rects) else 0.0
        self.tree: Optional[cKDTree] = None
        if len(rects) > leaf_size:
            centers = (rects[:, :2] + rects[:, 2:]) * 0.5
            self.tree = cKDTree(centers)

    def __len__(self) -> int:
        return len(self.indices)

    def query(self, query: np.ndarray) -> np.ndarray:
        rects = self.rects
        indices = self.indices
        if self.tree is not None:
            center = (query[:2] + query[2:]) * 0.5
            radius = float(((query[2:] - query[:2]) * 0.5).max()) + self.max_half_extent
            hits = self.tree.query_ball_point(center, radius + _RADIUS_PAD, p=np.inf)
            if not hits:
                return indices[:0]
            hits = np.asarray(hits, dtype=np.intp)
            rects = rects[hits]
            indices = indices[hits]

        overlap = ((rects[:, 0] <= query[2]) & (query[0] <= rects[:, 2])
                   & (rects[:, 1] <= query[3]) & (query[1] <= rects[:, 3]))
        return indices[overlap]


class SegmentSpatialIndex:
    """Insert-only rectangle index keyed by arena index."""

    def __init__(self, leaf_size: int = 32):
        self.leaf_size = leaf_size
        self._blocks: List[_Block] = []
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def insert(self, rect: Rect, index: int):
        rects = rect.to_array()[np.newaxis, :]
        indices = np.array([index], dtype=np.int64)

        while self._blocks and len(self._blocks[-1]) <= len(indices):
            smaller = self._blocks.pop()
            rects = np.concatenate([smaller.rects, rects])
            indices = np.concatenate([smaller.indices, indices])

        self._blocks.append(_Block(rects, indices, self.leaf_size))
        self._count += 1

    def query(self, rect: Rect) -> Set[int]:
        """Indices of every entry whose rectangle overlaps rect (may include extras)."""
        query = rect.to_array()
        found: Set[int] = set()
        for block in self._blocks:
            found.update(int(i) for i in block.query(query))
        return found

    def entries(self) -> List[Tuple[Rect, int]]:
        result = []
        for block in self._blocks:
            for row, index in zip(block.rects, block.indices):
                result.append((Rect(*(float(v) for v in row)), int(index)))
        return result

    @property
    def block_sizes(self) -> List[int]:
        return [len(b) for b in self._blocks]
