"""
Rendering Script

Grows a self-avoiding branching tree and renders it with Cairo.

Configuration is loaded from config/pipeline.json (defaults if missing).
Output paths are derived from the run name.

Modes:
    video - Render the growth animation to a GIF/MP4
    frame - Run the growth and save the final frame as PNG
    live  - Show the growth in an interactive window
"""

import argparse
import os
from dataclasses import replace
from pathlib import Path

from tqdm import tqdm

from config import load_config
from growth import GrowthConfig, Tree, Viewport
from growth.profiling import profiler
from rendering import TreeRenderer


def remove_if_exists(path: str):
    """Remove file if it exists to ensure fresh write."""
    p = Path(path)
    if p.exists():
        try:
            os.remove(p)
            print(f"Removed existing file: {path}")
        except OSError as e:
            print(f"Error removing {path}: {e}")


def build(pipeline):
    viewport = Viewport(pipeline.width, pipeline.height, pipeline.pixel_ratio)
    tree = Tree(viewport, GrowthConfig.from_pipeline(pipeline))
    return tree, TreeRenderer.from_pipeline(pipeline)


def render_video(pipeline):
    """Render the growth animation."""
    tree, renderer = build(pipeline)

    output_path = str(pipeline.animation_path)
    remove_if_exists(output_path)
    renderer.render_animation(
        tree, output_path,
        num_frames=pipeline.num_frames,
        fps=pipeline.fps,
        frame_skip=pipeline.frame_skip,
    )

    renderer.save_frame(str(pipeline.final_frame_path))
    return tree


def render_final_frame(pipeline):
    """Grow for num_frames ticks and save only the last frame."""
    tree, renderer = build(pipeline)

    for _ in tqdm(range(pipeline.num_frames), desc="Growing"):
        renderer.render_frame(tree)
        if not tree.is_growing:
            break

    print(f"Grew {tree.segment_count} segments in {tree.frame} frames")
    renderer.save_frame(str(pipeline.final_frame_path))
    return tree


def main():
    parser = argparse.ArgumentParser(description="Grow and render a self-avoiding branching tree.")
    parser.add_argument(
        '--mode',
        type=str,
        choices=['video', 'frame', 'live'],
        default='video',
        help='Rendering mode: video, frame, or live (default: video)'
    )
    parser.add_argument('--config', type=str, default='config/pipeline.json',
                        help='Path to the pipeline JSON config')
    parser.add_argument('--frames', type=int, default=None, help='Override the number of frames')
    parser.add_argument('--seed', type=int, default=None, help='Override the random seed')
    parser.add_argument('--profile', action='store_true', help='Print per-phase timings at exit')
    args = parser.parse_args()

    pipeline = load_config(args.config)
    if args.frames is not None:
        pipeline = replace(pipeline, num_frames=args.frames)
    if args.seed is not None:
        pipeline = replace(pipeline, random_seed=args.seed)
    if args.profile or pipeline.profile:
        profiler.enable()

    pipeline.create_output_dirs()

    print(f"Run: {pipeline.run_name}")
    print(f"Output: {pipeline.render_output_dir}")
    print(f"Mode: {args.mode}")
    print()

    if args.mode == 'video':
        render_video(pipeline)
    elif args.mode == 'frame':
        render_final_frame(pipeline)
    elif args.mode == 'live':
        from rendering.live import run_live
        run_live(pipeline)


if __name__ == '__main__':
    main()
