"""
Configuration for the branching growth engine.
"""

from dataclasses import dataclass
from typing import Tuple, Optional, Literal

import numpy as np

SeedLayout = Literal['corners', 'single']


@dataclass
class GrowthConfig:
    # Per-segment parameters are drawn uniformly from these ranges at creation
    grow_speed_range: Tuple[float, float] = (0.02, 0.08)
    limb_length_range: Tuple[float, float] = (0.01, 0.04)
    split_theta_range: Tuple[float, float] = (1.0, 1.0)   # radians, full width of the drift
    split_count_range: Tuple[int, int] = (2, 2)           # inclusive
    max_tree_depth: int = 40

    # Segments starting outside [-bounds_extent, bounds_extent]^2 never split
    bounds_extent: float = 0.5

    seed_layout: SeedLayout = 'corners'
    root_start: Tuple[float, float] = (0.0, 0.0)
    root_direction: Tuple[float, float] = (0.0, 1.0)

    random_seed: Optional[int] = None

    def __post_init__(self):
        for name in ('grow_speed_range', 'limb_length_range', 'split_theta_range', 'split_count_range'):
            lo, hi = getattr(self, name)
            if lo < 0 or hi < lo:
                raise ValueError(f"{name} must satisfy 0 <= low <= high, got {(lo, hi)}")
        if self.seed_layout not in ('corners', 'single'):
            raise ValueError(f"Unknown seed layout: {self.seed_layout!r}")

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.random_seed)

    @classmethod
    def from_pipeline(cls, pipeline_config) -> 'GrowthConfig':
        """Create a GrowthConfig from a PipelineConfig."""
        return cls(
            grow_speed_range=tuple(pipeline_config.grow_speed_range),
            limb_length_range=tuple(pipeline_config.limb_length_range),
            split_theta_range=tuple(pipeline_config.split_theta_range),
            split_count_range=tuple(pipeline_config.split_count_range),
            max_tree_depth=pipeline_config.max_tree_depth,
            bounds_extent=pipeline_config.bounds_extent,
            seed_layout=pipeline_config.seed_layout,
            root_start=tuple(pipeline_config.root_start),
            root_direction=tuple(pipeline_config.root_direction),
            random_seed=pipeline_config.random_seed,
        )
