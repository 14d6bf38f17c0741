"""
Interactive window that grows the tree in real time.

matplotlib's FuncAnimation plays the role of the browser's animation-frame
loop, and figure resize events replace the window resize listener: a new
size becomes a new viewport, which forces a full redraw on the next tick.
"""

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from config.pipeline import PipelineConfig
from growth import GrowthConfig, Tree, Viewport
from .tree_renderer import TreeRenderer


class LiveView:
    def __init__(self, pipeline: PipelineConfig):
        self.pipeline = pipeline
        self.viewport = Viewport(pipeline.width, pipeline.height, pipeline.pixel_ratio)
        self.tree = Tree(self.viewport, GrowthConfig.from_pipeline(pipeline))
        self.renderer = TreeRenderer.from_pipeline(pipeline)

        dpi = 100
        self.fig = plt.figure(figsize=(pipeline.width / dpi, pipeline.height / dpi), dpi=dpi)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.axis('off')
        self.image = self.ax.imshow(self.renderer.render_frame(self.tree, self.viewport))
        self.fig.canvas.mpl_connect('resize_event', self.on_resize)

    def on_resize(self, event):
        # event sizes are logical pixels; the canvas ratio scales them to device pixels
        if event.width <= 0 or event.height <= 0:
            return
        ratio = getattr(self.fig.canvas, 'device_pixel_ratio', 1.0) or 1.0
        self.viewport = Viewport(event.width, event.height, ratio)

    def update(self, frame_idx):
        frame = self.renderer.render_frame(self.tree, self.viewport)
        self.image.set_data(frame)
        self.image.set_extent((-0.5, frame.shape[1] - 0.5, frame.shape[0] - 0.5, -0.5))
        return [self.image]

    def run(self) -> FuncAnimation:
        anim = FuncAnimation(
            self.fig, self.update,
            frames=self.pipeline.num_frames,
            interval=1000 / self.pipeline.fps,
            blit=False,
            repeat=False,
        )
        plt.show()
        return anim


def run_live(pipeline: PipelineConfig) -> FuncAnimation:
    return LiveView(pipeline).run()
