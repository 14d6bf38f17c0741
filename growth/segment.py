"""
Segment - a single line of the growing tree, owned by the NodeArena.
"""

import math
from enum import Enum
from typing import List

from .config import GrowthConfig
from .vector import Vector2D, Rect


def random_between(rng, start: float, end: float) -> float:
    return float(rng.random()) * (end - start) + start


def random_int_between(rng, start: int, end: int) -> int:
    """Uniform integer in [start, end]."""
    return min(end, start + int(math.floor(float(rng.random()) * (end - start + 1))))


class DrawState(Enum):
    GROWING = 'growing'
    FULLY_DRAWN_CLEAN = 'fully_drawn_clean'


class Segment:
    __slots__ = (
        'start', 'end', 'last_drawn_end', 'growth_length', 'fully_drawn', 'depth',
        'children', 'grow_speed', 'limb_length', 'split_theta_range',
        'max_tree_depth', 'split_count',
    )

    def __init__(self, start: Vector2D, end: Vector2D, depth: int,
                 grow_speed: float, limb_length: float, split_theta_range: float,
                 max_tree_depth: int, split_count: int):
        self.start = start
        self.end = end
        self.last_drawn_end = start.copy()
        self.growth_length = 0.0
        self.fully_drawn = False
        self.depth = depth
        self.children: List[int] = []
        self.grow_speed = grow_speed
        self.limb_length = limb_length
        self.split_theta_range = split_theta_range
        self.max_tree_depth = max_tree_depth
        self.split_count = split_count

    @classmethod
    def random(cls, start: Vector2D, end: Vector2D, depth: int,
               rng, config: GrowthConfig) -> 'Segment':
        """Create a segment with its per-instance parameters drawn from rng."""
        return cls(
            start, end, depth,
            grow_speed=random_between(rng, *config.grow_speed_range),
            limb_length=random_between(rng, *config.limb_length_range),
            split_theta_range=random_between(rng, *config.split_theta_range),
            max_tree_depth=config.max_tree_depth,
            split_count=random_int_between(rng, *config.split_count_range),
        )

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def is_complete(self) -> bool:
        return self.growth_length >= 1.0

    @property
    def can_deepen(self) -> bool:
        return self.depth < self.max_tree_depth

    @property
    def draw_state(self) -> DrawState:
        if self.fully_drawn:
            return DrawState.FULLY_DRAWN_CLEAN
        return DrawState.GROWING

    @property
    def direction_angle(self) -> float:
        return (self.end - self.start).angle

    @property
    def length(self) -> float:
        return (self.end - self.start).magnitude

    @property
    def bounding_rect(self) -> Rect:
        return Rect.from_corners(self.start, self.end)

    def __repr__(self) -> str:
        return (f"Segment({self.start} -> {self.end}, depth={self.depth}, "
                f"growth={self.growth_length:.2f}, children={self.children})")
