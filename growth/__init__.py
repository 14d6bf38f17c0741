"""
Self-avoiding branching growth for 2D line drawings.

A tree of line segments grows a little every animation frame. Finished
segments split into slightly rotated children, and a child that would cross
an existing line is cut short where it meets it and stops growing.
"""

from .vector import Vector2D, Rect, check_intersection, cubic_out
from .config import GrowthConfig
from .segment import Segment, DrawState
from .arena import NodeArena, InvariantViolation
from .spatial import SegmentSpatialIndex
from .engine import GrowthEngine
from .draw_state import DrawStateTracker, PathCommand, PathRecorder
from .tree import Tree, Viewport, init, tick

__all__ = [
    'Vector2D',
    'Rect',
    'check_intersection',
    'cubic_out',
    'GrowthConfig',
    'Segment',
    'DrawState',
    'NodeArena',
    'InvariantViolation',
    'SegmentSpatialIndex',
    'GrowthEngine',
    'DrawStateTracker',
    'PathCommand',
    'PathRecorder',
    'Tree',
    'Viewport',
    'init',
    'tick',
]
