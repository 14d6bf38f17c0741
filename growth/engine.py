"""
GrowthEngine - advances growth leaves each tick and splits completed ones.

Every tick walks the tree in pre-order from the root. A growth leaf (a
segment without children) lengthens by its grow_speed; on the tick it
completes it splits into split_count children, unless it is already at its
maximum depth or starts outside the permitted region. A child whose path
would cross an existing segment is clipped at the nearest crossing and
forced to its maximum depth, which stops that branch for good.

A segment is fully processed before any of its children are visited and is
never revisited in the same tick, so no two accesses to the arena conflict.
"""

import math
from typing import List, Optional

from .arena import NodeArena
from .config import GrowthConfig
from .profiling import profile
from .segment import Segment, random_between
from .spatial import SegmentSpatialIndex
from .vector import Vector2D, Rect, check_intersection, distance_squared

# Growth within this of 1.0 snaps to 1.0, so n increments of 1/n complete on tick n
GROWTH_EPSILON = 1e-9


class GrowthEngine:
    def __init__(self, arena: NodeArena, spatial_index: SegmentSpatialIndex,
                 rng, config: GrowthConfig):
        self.arena = arena
        self.spatial_index = spatial_index
        self.rng = rng
        self.config = config
        self.splits = 0
        self.collisions = 0

    @profile
    def grow(self, root: int = 0):
        """Run one growth pass over the whole tree."""
        for index in self.arena.walk(root):
            if self._advance(index):
                parent = self.arena.read(index)
                if self._can_split(parent):
                    for _ in range(parent.split_count):
                        self.split(index)

    def _advance(self, index: int) -> bool:
        """Grow a leaf; True only on the tick its growth reaches 1.0."""
        with self.arena.write(index) as segment:
            if not segment.is_leaf or segment.is_complete:
                return False
            growth = segment.growth_length + segment.grow_speed
            if growth >= 1.0 - GROWTH_EPSILON:
                growth = 1.0
            segment.growth_length = growth
            return growth == 1.0

    def _can_split(self, segment: Segment) -> bool:
        extent = self.config.bounds_extent
        return (segment.can_deepen
                and abs(segment.start.x) <= extent
                and abs(segment.start.y) <= extent)

    def split(self, parent_index: int) -> int:
        """Append one child to parent_index and return the child's index."""
        parent = self.arena.read(parent_index)

        new_start = parent.end.copy()
        drift = random_between(self.rng, -parent.split_theta_range * 0.5,
                               parent.split_theta_range * 0.5)
        theta = parent.direction_angle + drift
        candidate_end = new_start + Vector2D.from_angle(theta, parent.limb_length)
        depth = parent.depth + int(math.floor(random_between(self.rng, 0.45, 1.0) + 0.5))

        intersections = self.find_intersections(new_start, candidate_end)
        nearest = self.nearest_intersection(new_start, intersections)

        child_index = self.arena.create(new_start, candidate_end, depth)
        # The index keeps the unclipped rectangle; it contains the clipped
        # segment, so later queries still see every real overlap.
        self.spatial_index.insert(Rect.from_corners(new_start, candidate_end), child_index)

        if nearest is not None:
            with self.arena.write(child_index) as child:
                child.end = nearest
                child.depth = child.max_tree_depth
            self.collisions += 1

        with self.arena.write(parent_index) as parent:
            parent.children.append(child_index)
        self.splits += 1
        return child_index

    def find_intersections(self, start: Vector2D, end: Vector2D) -> List[Vector2D]:
        """Crossings of start-end with every indexed segment."""
        intersections = []
        for index in sorted(self.spatial_index.query(Rect.from_corners(start, end))):
            other = self.arena.read(index)
            point = check_intersection(start, end, other.start, other.end)
            if point is not None:
                intersections.append(point)
        return intersections

    @staticmethod
    def nearest_intersection(origin: Vector2D,
                             intersections: List[Vector2D]) -> Optional[Vector2D]:
        if not intersections:
            return None
        return min(intersections, key=lambda p: distance_squared(p, origin))
