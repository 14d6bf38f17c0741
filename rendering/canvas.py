"""
Cairo-backed line-drawing surface.

The canvas keeps its pixels between frames, so the tree's incremental draw
commands accumulate on top of what was painted before. Commands arrive in
normalized tree coordinates and are mapped to device pixels through the
viewport.
"""

import cairo

from config.render_config import TreeRenderConfig
from growth.draw_state import PathRecorder
from growth.tree import Viewport


class CairoCanvas:
    def __init__(self, surface: cairo.ImageSurface, ctx: cairo.Context,
                 viewport: Viewport, config: TreeRenderConfig):
        self.surface = surface
        self.ctx = ctx
        self.viewport = viewport
        self.config = config

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def _fill(self, alpha: float):
        r, g, b, _ = self.config.background_color
        self.ctx.set_source_rgba(r, g, b, alpha)
        self.ctx.rectangle(0, 0, self.width, self.height)
        self.ctx.fill()

    def clear(self):
        self._fill(self.config.background_color[3])

    def fade(self, rng):
        if rng.random() < self.config.fade_strong_chance:
            self._fill(self.config.fade_alpha_strong)
        else:
            self._fill(self.config.fade_alpha)
    def stroke(self):
        self.ctx.set_line_width(self.config.line_width * self.viewport.pixel_ratio)
        self.ctx.set_source_rgba(*self.config.line_color)
        self.ctx.stroke()

    def paint(self, path: PathRecorder, forced: bool, rng):
        """Paint one frame: clear on a forced redraw, veil, then stroke the whole path at once."""
        if forced:
            self.clear()
        self.fade(rng)
        self.ctx.new_path()
        path.replay(self.ctx, transform=self.viewport.to_device)
        self.stroke()
