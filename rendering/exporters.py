"""
Writers for rendered frames. Keeps the renderers free of file-format details.
"""

import imageio
import numpy as np
from pathlib import Path
from typing import List


def frame_to_rgb(frame: np.ndarray) -> np.ndarray:
    """Drop the alpha channel of an RGBA frame; the background is opaque."""
    if frame.ndim == 3 and frame.shape[2] == 4:
        return np.ascontiguousarray(frame[:, :, :3])
    return frame


def save_frame_as_image(frame: np.ndarray, output_path: str):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    imageio.imwrite(output_path, frame_to_rgb(frame))


def save_frames_as_video(frames: List[np.ndarray], output_path: str, fps: int = 30):
    """
    Write frames as an animation. The container is picked from the suffix:
    .gif goes through Pillow, anything else (e.g. .mp4) through ffmpeg.
    """
    if not frames:
        raise ValueError("No frames to save")

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rgb_frames = [frame_to_rgb(f) for f in frames]

    if path.suffix.lower() == '.gif':
        imageio.mimsave(str(path), rgb_frames, duration=1000.0 / fps, loop=0)
    else:
        imageio.mimsave(str(path), rgb_frames, fps=fps)

    print(f"  Saved animation ({len(frames)} frames): {path}")
