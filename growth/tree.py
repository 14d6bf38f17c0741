"""
Tree - owns the arena, spatial index, growth engine and draw tracker, and
runs one grow pass followed by one draw pass per animation frame.

Coordinates are normalized: (0, 0) is the centre of the drawing surface and
the unit square [-0.5, 0.5]^2 spans its shorter side.
"""

import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .arena import NodeArena
from .config import GrowthConfig
from .draw_state import DrawStateTracker, PathRecorder
from .engine import GrowthEngine
from .profiling import profiler
from .segment import Segment
from .spatial import SegmentSpatialIndex
from .vector import Vector2D

ROOT_INDEX = 0


@dataclass(frozen=True)
class Viewport:
    """Page descriptor: CSS size plus device pixel ratio."""
    width: float
    height: float
    pixel_ratio: float = 1.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0 or self.pixel_ratio <= 0:
            raise ValueError(f"Viewport dimensions must be positive, got {self}")

    @property
    def device_width(self) -> float:
        return self.width * self.pixel_ratio

    @property
    def device_height(self) -> float:
        return self.height * self.pixel_ratio

    @property
    def scale(self) -> float:
        return min(self.device_width, self.device_height)

    def to_device(self, x: float, y: float) -> Tuple[float, float]:
        """Map a normalized point to device pixels."""
        return (x * self.scale + self.device_width * 0.5,
                y * self.scale + self.device_height * 0.5)


class Tree:
    def __init__(self, viewport: Viewport, config: Optional[GrowthConfig] = None, rng=None):
        self.config = config or GrowthConfig()
        self.rng = rng if rng is not None else self.config.make_rng()
        self.viewport = viewport
        self.arena = NodeArena(self.config, self.rng)
        self.spatial_index = SegmentSpatialIndex()
        self.engine = GrowthEngine(self.arena, self.spatial_index, self.rng, self.config)
        self.tracker = DrawStateTracker(self.arena)
        self.force_redraw = True
        self.last_tick_forced = False
        self.frame = 0

        self._initialize()

    def _initialize(self):
        if self.config.seed_layout == 'corners':
            self._seed_corners()
        else:
            self._seed_single()

        for index in range(len(self.arena)):
            self.spatial_index.insert(self.arena.read(index).bounding_rect, index)

        print(f"Initialized Tree:")
        print(f"  Layout: {self.config.seed_layout}")
        print(f"  Segments: {len(self.arena)}")
        print(f"  Viewport: {self.viewport.device_width:.0f}x{self.viewport.device_height:.0f} device px")

    def _seed_single(self):
        start = Vector2D.from_tuple(self.config.root_start)
        root = self.arena.create(start, start.copy(), 0)
        direction = Vector2D.from_tuple(self.config.root_direction)
        with self.arena.write(root) as segment:
            segment.end = start + direction * (segment.limb_length / max(direction.magnitude, 1e-12))

    def _seed_corners(self):
        origin = Vector2D(0.0, 0.0)
        root = self.arena.create(origin, origin.copy(), 0)
        l = self.arena.read(root).limb_length
        # left/right, top/bottom corners, each pointing towards the centre
        corners = [
            ((-0.5, -0.5), (-0.5 + l, -0.5 + l)),
            ((-0.5, 0.5), (-0.5 + l, 0.5 - l)),
            ((0.5, -0.5), (0.5 - l, -0.5 + l)),
            ((0.5, 0.5), (0.5 - l, 0.5 - l)),
        ]
        children = [self.arena.create(Vector2D.from_tuple(s), Vector2D.from_tuple(e), 1) for s, e in corners]
        with self.arena.write(root) as segment:
            segment.children.extend(children)

    def tick(self, viewport: Optional[Viewport] = None,
             force_redraw: bool = False) -> PathRecorder:
        """Grow, then draw; returns the path recorded for this frame."""
        started = time.perf_counter()
        if viewport is not None and viewport != self.viewport:
            self.viewport = viewport
            self.force_redraw = True
        force = force_redraw or self.force_redraw

        self.engine.grow(ROOT_INDEX)

        recorder = PathRecorder()
        self.tracker.draw(recorder, force, ROOT_INDEX)

        self.last_tick_forced = force
        self.force_redraw = False
        self.frame += 1
        profiler.record_frame(time.perf_counter() - started)
        return recorder

    @property
    def segment_count(self) -> int:
        return len(self.arena)

    @property
    def is_growing(self) -> bool:
        """True while some leaf is still lengthening or a finished segment awaits its final draw."""
        for segment in self.arena.segments():
            if segment.is_leaf and not segment.is_complete:
                return True
            if segment.is_complete and not segment.fully_drawn:
                return True
        return False

    def get_segments(self) -> List[Segment]:
        return self.arena.segments()

    def get_line_segments(self) -> List[tuple]:
        """Return all segments as ((x1,y1), (x2,y2)) tuples."""
        return [(s.start.to_tuple(), s.end.to_tuple()) for s in self.arena.segments()]


def init(viewport: Viewport, config: Optional[GrowthConfig] = None, rng=None) -> Tree:
    return Tree(viewport, config, rng)


def tick(state: Tree, viewport: Optional[Viewport] = None,
         force_redraw: bool = False) -> PathRecorder:
    return state.tick(viewport, force_redraw)
