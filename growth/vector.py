"""
2D vector type and the small geometry helpers used by the growth engine.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


class Vector2D:
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vector2D':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x / scalar, self.y / scalar)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.4f}, {self.y:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return bool(np.isclose(self.x, other.x) and np.isclose(self.y, other.y))

    __hash__ = None

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def magnitude_squared(self) -> float:
        return self.x ** 2 + self.y ** 2

    @property
    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def distance_squared_to(self, other: 'Vector2D') -> float:
        return (self - other).magnitude_squared

    def lerp(self, other: 'Vector2D', t: float) -> 'Vector2D':
        return Vector2D(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @classmethod
    def from_tuple(cls, t) -> 'Vector2D':
        return cls(t[0], t[1])

    @classmethod
    def from_angle(cls, theta: float, length: float = 1.0) -> 'Vector2D':
        return cls(math.cos(theta) * length, math.sin(theta) * length)

    def copy(self) -> 'Vector2D':
        return Vector2D(self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding rectangle. Touching edges count as overlap."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_corners(cls, a: Vector2D, b: Vector2D) -> 'Rect':
        return cls(min(a.x, b.x), min(a.y, b.y), max(a.x, b.x), max(a.y, b.y))

    def intersects(self, other: 'Rect') -> bool:
        return (self.min_x <= other.max_x and other.min_x <= self.max_x
                and self.min_y <= other.max_y and other.min_y <= self.max_y)

    def contains(self, other: 'Rect') -> bool:
        return (self.min_x <= other.min_x and other.max_x <= self.max_x
                and self.min_y <= other.min_y and other.max_y <= self.max_y)

    def to_array(self) -> np.ndarray:
        return np.array([self.min_x, self.min_y, self.max_x, self.max_y])


def check_intersection(p1: Vector2D, p2: Vector2D,
                       p3: Vector2D, p4: Vector2D) -> Optional[Vector2D]:
    """
    Intersection point of segments p1-p2 and p3-p4, or None.

    Segments sharing an endpoint never intersect, and parallel or collinear
    segments are reported as not intersecting.
    """
    x1, y1, x2, y2 = p1.x, p1.y, p2.x, p2.y
    x3, y3, x4, y4 = p3.x, p3.y, p4.x, p4.y

    if ((x1 == x3 and y1 == y3) or (x1 == x4 and y1 == y4)
            or (x2 == x3 and y2 == y3) or (x2 == x4 and y2 == y4)):
        return None

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    nume_a = (x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)
    nume_b = (x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)

    if denom == 0.0 or (nume_a == 0.0 and nume_b == 0.0):
        return None

    u_a = nume_a / denom
    u_b = nume_b / denom

    if 0.0 <= u_a <= 1.0 and 0.0 <= u_b <= 1.0:
        return Vector2D(x1 + u_a * (x2 - x1), y1 + u_a * (y2 - y1))
    return None


def cubic_out(t: float) -> float:
    f = t - 1.0
    return f * f * f + 1.0


def distance_squared(a: Vector2D, b: Vector2D) -> float:
    dx = b.x - a.x
    dy = b.y - a.y
    return dx * dx + dy * dy
