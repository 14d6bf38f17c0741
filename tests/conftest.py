"""
Shared fixtures for the growth and rendering tests.
"""

import pytest

from growth import GrowthConfig, NodeArena, SegmentSpatialIndex, GrowthEngine, Vector2D


class ScriptedRandom:
    """
    Random source that cycles through a fixed list of values.

    With the default 0.5 the split drift is zero, the depth increment is +1
    and every range collapses to its midpoint.
    """

    def __init__(self, values=(0.5,)):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def fixed_config(**overrides) -> GrowthConfig:
    params = dict(
        grow_speed_range=(0.1, 0.1),
        limb_length_range=(0.05, 0.05),
        split_theta_range=(0.0, 0.0),
        split_count_range=(2, 2),
        max_tree_depth=40,
        seed_layout='single',
    )
    params.update(overrides)
    return GrowthConfig(**params)


class GrowthRig:
    """Arena, spatial index and engine wired together without a Tree."""

    def __init__(self, config: GrowthConfig, rng=None):
        self.config = config
        self.rng = rng or ScriptedRandom()
        self.arena = NodeArena(config, self.rng)
        self.index = SegmentSpatialIndex()
        self.engine = GrowthEngine(self.arena, self.index, self.rng, config)

    def add(self, start, end, depth=0) -> int:
        i = self.arena.create(Vector2D(*start), Vector2D(*end), depth)
        self.index.insert(self.arena.read(i).bounding_rect, i)
        return i


@pytest.fixture
def scripted_rng():
    return ScriptedRandom()


@pytest.fixture
def rig_factory():
    def make(rng=None, **overrides):
        return GrowthRig(fixed_config(**overrides), rng)
    return make
