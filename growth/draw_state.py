"""
Incremental redraw of the tree onto a line-drawing surface.

A surface is anything with move_to(x, y) and line_to(x, y). The tracker only
emits path commands in normalized coordinates; clearing and stroking are
left to the caller.
"""

from typing import Callable, List, NamedTuple, Optional, Tuple

from .arena import NodeArena
from .profiling import profile
from .segment import Segment
from .vector import Vector2D, cubic_out

Transform = Callable[[float, float], Tuple[float, float]]


class PathCommand(NamedTuple):
    op: str
    x: float
    y: float


class PathRecorder:
    """Surface that records path commands for later replay."""

    def __init__(self):
        self.commands: List[PathCommand] = []

    def move_to(self, x: float, y: float):
        self.commands.append(PathCommand('move_to', x, y))

    def line_to(self, x: float, y: float):
        self.commands.append(PathCommand('line_to', x, y))

    def __len__(self) -> int:
        return len(self.commands)

    def segments(self) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """Recorded move_to/line_to pairs as ((x1, y1), (x2, y2))."""
        result = []
        start = None
        for command in self.commands:
            if command.op == 'move_to':
                start = (command.x, command.y)
            elif start is not None:
                end = (command.x, command.y)
                result.append((start, end))
                start = end
        return result

    def replay(self, surface, transform: Optional[Transform] = None):
        for op, x, y in self.commands:
            if transform is not None:
                x, y = transform(x, y)
            getattr(surface, op)(x, y)


def visible_end(segment: Segment) -> Vector2D:
    """End point of the part of the segment that has grown so far."""
    if segment.growth_length == 1.0:
        return segment.end
    g = segment.growth_length
    return segment.start.lerp(segment.end, g * cubic_out(g))


class DrawStateTracker:
    def __init__(self, arena: NodeArena):
        self.arena = arena

    @profile
    def draw(self, surface, force_redraw: bool, root: int = 0) -> int:
        """Emit path commands for every segment needing a redraw; returns how many."""
        emitted = 0
        for index in self.arena.walk(root):
            with self.arena.write(index) as segment:
                if self._draw_segment(segment, surface, force_redraw):
                    emitted += 1
        return emitted

    @staticmethod
    def _draw_segment(segment: Segment, surface, force_redraw: bool) -> bool:
        do_redraw = force_redraw or not segment.fully_drawn
        end = visible_end(segment)

        if do_redraw:
            # last_drawn_end starts at start, so a first draw begins at start
            start = segment.start if force_redraw else segment.last_drawn_end
            surface.move_to(start.x, start.y)
            surface.line_to(end.x, end.y)
            segment.last_drawn_end = end.copy()

        if segment.growth_length == 1.0 and not segment.fully_drawn:
            segment.fully_drawn = True
        return do_redraw
