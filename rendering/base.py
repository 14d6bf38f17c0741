"""
Base renderer class defining the interface for all renderers.
"""

import cairo
import numpy as np
from abc import ABC, abstractmethod
from typing import Tuple

from config.render_config import TreeRenderConfig


class Renderer(ABC):
    def __init__(self, config: TreeRenderConfig):
        self.config = config

    def _create_surface(self, width: int, height: int) -> Tuple[cairo.ImageSurface, cairo.Context]:
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
        ctx = cairo.Context(surface)

        if self.config.antialiasing:
            ctx.set_antialias(cairo.ANTIALIAS_BEST)

        r, g, b, a = self.config.background_color
        ctx.set_source_rgba(r, g, b, a)
        ctx.paint()

        return surface, ctx

    @staticmethod
    def _surface_to_numpy(surface: cairo.ImageSurface) -> np.ndarray:
        """Copy a cairo ARGB32 surface into an RGBA uint8 array."""
        surface.flush()
        height, width, stride = surface.get_height(), surface.get_width(), surface.get_stride()
        buf = np.ndarray(shape=(height, stride // 4, 4), dtype=np.uint8, buffer=surface.get_data())
        bgra = buf[:, :width, :]
        # cairo stores native-endian premultiplied ARGB, i.e. BGRA on little-endian
        return bgra[:, :, [2, 1, 0, 3]].copy()

    @abstractmethod
    def render_frame(self, *args, **kwargs) -> np.ndarray:
        pass

    @abstractmethod
    def render_animation(self, *args, **kwargs):
        pass
