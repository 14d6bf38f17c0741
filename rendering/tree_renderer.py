"""
Tree renderer using Cairo.

Drives the tree one tick per frame and paints each tick's draw commands onto
a persistent canvas, the way a browser page would on requestAnimationFrame.
"""

import numpy as np
from tqdm import tqdm
from typing import List, Optional

from config.render_config import TreeRenderConfig
from growth.profiling import profile_block
from growth.tree import Tree, Viewport
from .base import Renderer
from .canvas import CairoCanvas
from .exporters import save_frame_as_image, save_frames_as_video


class TreeRenderer(Renderer):
    def __init__(self, config: TreeRenderConfig = None, rng=None):
        super().__init__(config or TreeRenderConfig())
        self.rng = rng if rng is not None else np.random.default_rng()
        self.canvas: Optional[CairoCanvas] = None

    @classmethod
    def from_pipeline(cls, pipeline_config) -> 'TreeRenderer':
        """Renderer sized like the pipeline, with a fade veil seeded from its random_seed."""
        config = TreeRenderConfig(
            output_width=pipeline_config.width,
            output_height=pipeline_config.height,
            pixel_ratio=pipeline_config.pixel_ratio,
        )
        return cls(config, rng=np.random.default_rng(pipeline_config.random_seed))

    def _new_canvas(self, viewport: Viewport) -> CairoCanvas:
        width = max(1, int(round(viewport.device_width)))
        height = max(1, int(round(viewport.device_height)))
        surface, ctx = self._create_surface(width, height)
        return CairoCanvas(surface, ctx, viewport, self.config)

    def render_frame(self, tree: Tree, viewport: Optional[Viewport] = None,
                     force_redraw: bool = False) -> np.ndarray:
        """Advance the tree one tick and return the canvas as RGBA."""
        viewport = viewport or tree.viewport
        if self.canvas is None or self.canvas.viewport != viewport:
            # A fresh canvas is blank, so everything must be drawn again
            self.canvas = self._new_canvas(viewport)
            force_redraw = True

        path = tree.tick(viewport, force_redraw)
        with profile_block('TreeRenderer.paint'):
            self.canvas.paint(path, tree.last_tick_forced, self.rng)
        return self.current_frame()

    def current_frame(self) -> np.ndarray:
        if self.canvas is None:
            raise RuntimeError("Nothing has been rendered yet")
        return self._surface_to_numpy(self.canvas.surface)

    def save_frame(self, output_path: str):
        save_frame_as_image(self.current_frame(), output_path)
        print(f"  Saved frame: {output_path}")

    def render_animation(self, tree: Tree, output_path: str, num_frames: int,
                         fps: int = 60, frame_skip: int = 1,
                         stop_when_done: bool = True) -> List[np.ndarray]:
        """
        Render up to num_frames ticks and save every frame_skip-th frame.

        With stop_when_done the loop ends early once nothing is left to grow
        or draw.
        """
        frames = []
        for i in tqdm(range(num_frames), desc="Rendering tree frames"):
            frame = self.render_frame(tree)
            if i % frame_skip == 0:
                frames.append(frame)
            if stop_when_done and not tree.is_growing:
                if i % frame_skip != 0:
                    frames.append(frame)
                print(f"  Growth finished after {tree.frame} frames")
                break

        print(f"  Segments: {tree.segment_count}, splits: {tree.engine.splits}, "
              f"collisions: {tree.engine.collisions}")
        save_frames_as_video(frames, output_path, fps=max(1, fps // frame_skip))
        return frames
