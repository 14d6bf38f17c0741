"""
Configuration for rendering module.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class TreeRenderConfig:
    output_width: int = 800
    output_height: int = 800
    pixel_ratio: float = 1.0
    background_color: Tuple[float, float, float, float] = (0.2, 0.2, 0.2, 1.0)  # #333

    line_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    line_width: float = 1.5  # CSS pixels, multiplied by pixel_ratio

    # Every frame the canvas is veiled with the background colour so old
    # lines slowly dim. The stronger veil is destructive on 8-bit channels,
    # so it is applied only occasionally.
    fade_alpha: float = 2 / 255
    fade_alpha_strong: float = 3 / 255
    fade_strong_chance: float = 0.05

    antialiasing: bool = True
