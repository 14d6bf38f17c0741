"""
Rendering module: paints the growing tree with Cairo, frame by frame.
"""

from config.render_config import TreeRenderConfig
from .canvas import CairoCanvas
from .tree_renderer import TreeRenderer
from .exporters import (
    frame_to_rgb,
    save_frame_as_image,
    save_frames_as_video,
)
