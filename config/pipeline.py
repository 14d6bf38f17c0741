"""
Unified configuration for a growth run.

This is the single source of truth for the viewport, the growth settings
and the output paths.
"""

from dataclasses import dataclass, asdict
from typing import Tuple, Optional
from pathlib import Path
import json


@dataclass
class PipelineConfig:
    # ==================== OUTPUT SETTINGS ====================
    output_base: str = 'outputs'
    run_name: str = 'tree'

    # ==================== VIEWPORT ====================
    width: int = 800
    height: int = 800
    pixel_ratio: float = 1.0

    # ==================== GROWTH SETTINGS ====================
    grow_speed_range: Tuple[float, float] = (0.02, 0.08)
    limb_length_range: Tuple[float, float] = (0.01, 0.04)
    split_theta_range: Tuple[float, float] = (1.0, 1.0)
    split_count_range: Tuple[int, int] = (2, 2)
    max_tree_depth: int = 40
    bounds_extent: float = 0.5
    seed_layout: str = 'corners'
    root_start: Tuple[float, float] = (0.0, 0.0)       # 'single' layout only
    root_direction: Tuple[float, float] = (0.0, 1.0)

    # ==================== ANIMATION ====================
    num_frames: int = 900
    fps: int = 60
    frame_skip: int = 2  # keep every Nth frame in exported videos
    video_format: str = 'gif'

    # ==================== MISC ====================
    random_seed: Optional[int] = None
    profile: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0 or self.pixel_ratio <= 0:
            raise ValueError("width, height and pixel_ratio must be positive")
        if self.frame_skip < 1:
            raise ValueError("frame_skip must be at least 1")

    # ==================== DERIVED PATHS ====================
    @property
    def render_output_dir(self) -> Path:
        return Path(self.output_base) / 'rendering'

    @property
    def animation_path(self) -> Path:
        return self.render_output_dir / f'{self.run_name}_growth.{self.video_format}'

    @property
    def final_frame_path(self) -> Path:
        return self.render_output_dir / f'{self.run_name}_final.png'

    # ==================== DIRECTORY CREATION ====================
    def create_output_dirs(self):
        """Create all output directories."""
        self.render_output_dir.mkdir(parents=True, exist_ok=True)


_TUPLE_FIELDS = ('grow_speed_range', 'limb_length_range', 'split_theta_range', 'split_count_range',
                 'root_start', 'root_direction')


def load_config(path: str = 'config/pipeline.json') -> PipelineConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return PipelineConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    for name in _TUPLE_FIELDS:
        if name in data:
            data[name] = tuple(data[name])

    return PipelineConfig(**data)


def save_config(config: PipelineConfig, path: str = 'config/pipeline.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(config)
    for name in _TUPLE_FIELDS:
        data[name] = list(data[name])

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)

    print(f"Saved config to {config_path}")
