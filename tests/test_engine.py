"""
Unit tests for GrowthEngine: growth, splitting and self-avoidance.
"""

import math

import pytest

from growth import GrowthConfig, Tree, Viewport, Vector2D
from growth.engine import GrowthEngine

from .conftest import ScriptedRandom


class TestGrowth:

    def test_root_completes_after_exactly_ten_ticks(self, rig_factory):
        """grow_speed 0.1 reaches 1.0 on the tenth tick despite float rounding."""
        rig = rig_factory(grow_speed_range=(0.1, 0.1))
        root = rig.add((0.0, 0.0), (0.0, 0.05))

        for _ in range(9):
            rig.engine.grow(root)
        assert rig.arena.read(root).growth_length < 1.0
        assert rig.arena.read(root).children == []

        rig.engine.grow(root)
        assert rig.arena.read(root).growth_length == 1.0

    def test_only_leaves_grow(self, rig_factory):
        rig = rig_factory()
        root = rig.add((0.0, 0.0), (0.0, 0.05))
        child = rig.add((0.0, 0.05), (0.0, 0.1), depth=1)
        with rig.arena.write(root) as seg:
            seg.children.append(child)

        rig.engine.grow(root)
        assert rig.arena.read(root).growth_length == 0.0
        assert rig.arena.read(child).growth_length == pytest.approx(0.1)

    def test_growth_is_monotonic_and_bounded(self):
        tree = Tree(Viewport(200, 200), GrowthConfig(random_seed=11, max_tree_depth=8))
        previous = {}
        for _ in range(250):
            tree.tick()
            for i, seg in enumerate(tree.get_segments()):
                assert 0.0 <= seg.growth_length <= 1.0
                assert seg.growth_length >= previous.get(i, 0.0)
                previous[i] = seg.growth_length

    def test_children_appear_once_on_completion_tick(self):
        tree = Tree(Viewport(200, 200), GrowthConfig(random_seed=5, seed_layout="single", max_tree_depth=8))
        before_growth = {}
        settled_children = {}
        for _ in range(250):
            before_growth = {i: s.growth_length for i, s in enumerate(tree.get_segments())}
            tree.tick()
            for i, seg in enumerate(tree.get_segments()):
                if i in settled_children:
                    assert tuple(seg.children) == settled_children[i]
                elif seg.children:
                    assert before_growth.get(i, 0.0) < 1.0
                    assert seg.growth_length == 1.0
                    settled_children[i] = tuple(seg.children)
        assert settled_children


class TestSplit:

    def test_split_count_children_start_at_parent_end(self, rig_factory):
        rig = rig_factory(split_count_range=(3, 3), grow_speed_range=(0.5, 0.5))
        root = rig.add((0.0, 0.0), (0.0, 0.05))

        rig.engine.grow(root)
        rig.engine.grow(root)

        parent = rig.arena.read(root)
        assert len(parent.children) == 3
        for index in parent.children:
            assert rig.arena.read(index).start == parent.end
            assert rig.arena.read(index).depth == 1

    def test_new_children_are_indexed(self, rig_factory):
        rig = rig_factory(grow_speed_range=(0.5, 0.5))
        root = rig.add((0.0, 0.0), (0.0, 0.05))
        rig.engine.grow(root)
        rig.engine.grow(root)
        assert len(rig.index) == len(rig.arena) == 3

    def test_drift_rotates_the_child(self, rig_factory):
        rig = rig_factory(rng=ScriptedRandom([0.75]), split_theta_range=(1.0, 1.0))
        parent = rig.add((0.0, 0.0), (0.0, 0.05))
        child = rig.arena.read(rig.engine.split(parent))
        assert child.direction_angle == pytest.approx(math.pi / 2 + 0.25)
        assert child.length == pytest.approx(0.05)

    def test_depth_increment_can_round_to_zero(self, rig_factory):
        # the parent takes four draws; the split then draws drift, then depth
        rig = rig_factory(rng=ScriptedRandom([0.5] * 5 + [0.0]))
        parent = rig.add((0.0, 0.0), (0.0, 0.05), depth=4)
        child = rig.engine.split(parent)
        assert rig.arena.read(child).depth == 4

    def test_depth_increment_usually_one(self, rig_factory):
        rig = rig_factory(rng=ScriptedRandom([0.5] * 5 + [0.1]))
        parent = rig.add((0.0, 0.0), (0.0, 0.05), depth=4)
        child = rig.engine.split(parent)
        assert rig.arena.read(child).depth == 5

    def test_no_split_at_max_depth(self, rig_factory):
        rig = rig_factory(max_tree_depth=3, grow_speed_range=(1.0, 1.0))
        leaf = rig.add((0.0, 0.0), (0.0, 0.05), depth=3)
        rig.engine.grow(leaf)
        assert rig.arena.read(leaf).growth_length == 1.0
        assert rig.arena.read(leaf).children == []

    def test_no_split_when_start_outside_bounds(self, rig_factory):
        rig = rig_factory(grow_speed_range=(1.0, 1.0))
        leaf = rig.add((0.6, 0.0), (0.6, 0.05))
        for _ in range(3):
            rig.engine.grow(leaf)
        assert rig.arena.read(leaf).children == []

    def test_start_on_bounds_edge_may_split(self, rig_factory):
        rig = rig_factory(grow_speed_range=(0.5, 0.5))
        leaf = rig.add((-0.5, 0.5), (-0.45, 0.45))
        rig.engine.grow(leaf)
        rig.engine.grow(leaf)
        assert len(rig.arena.read(leaf).children) == 2


class TestSelfAvoidance:

    def _diagonal_rig(self, rig_factory):
        rig = rig_factory(limb_length_range=(0.2, 0.2))
        parent = rig.add((0.3, 0.3), (0.4, 0.4))
        return rig, parent

    def test_blocked_child_is_clipped_and_stopped(self, rig_factory):
        rig, parent = self._diagonal_rig(rig_factory)
        rig.add((0.4, 0.6), (0.6, 0.4))

        child_index = rig.engine.split(parent)
        child = rig.arena.read(child_index)

        assert child.start == Vector2D(0.4, 0.4)
        assert child.end.x == pytest.approx(0.5)
        assert child.end.y == pytest.approx(0.5)
        assert child.depth == child.max_tree_depth
        assert rig.arena.read(parent).children == [child_index]
        assert rig.engine.collisions == 1

    def test_nearest_crossing_wins(self, rig_factory):
        rig, parent = self._diagonal_rig(rig_factory)
        rig.add((0.4, 0.6), (0.6, 0.4))      # crosses at (0.5, 0.5)
        rig.add((0.35, 0.55), (0.55, 0.35))  # crosses at (0.45, 0.45)

        child = rig.arena.read(rig.engine.split(parent))
        assert child.end.to_tuple() == pytest.approx((0.45, 0.45))

    def test_clipped_child_never_splits(self, rig_factory):
        rig, parent = self._diagonal_rig(rig_factory)
        rig.add((0.4, 0.6), (0.6, 0.4))
        child = rig.engine.split(parent)
        with rig.arena.write(parent) as seg:
            seg.growth_length = 1.0

        for _ in range(30):
            rig.engine.grow(parent)
        assert rig.arena.read(child).growth_length == 1.0
        assert rig.arena.read(child).children == []

    def test_index_keeps_unclipped_rectangle(self, rig_factory):
        rig, parent = self._diagonal_rig(rig_factory)
        rig.add((0.4, 0.6), (0.6, 0.4))
        child = rig.engine.split(parent)

        rect = dict((i, r) for r, i in rig.index.entries())[child]
        far = 0.4 + 0.2 * math.cos(math.pi / 4)
        assert rect.max_x == pytest.approx(far)
        assert rect.contains(rig.arena.read(child).bounding_rect)

    def test_parent_and_siblings_do_not_block(self, rig_factory):
        rig = rig_factory(split_count_range=(4, 4), grow_speed_range=(0.5, 0.5))
        root = rig.add((0.0, 0.0), (0.0, 0.05))
        rig.engine.grow(root)
        rig.engine.grow(root)
        assert len(rig.arena.read(root).children) == 4
        for index in rig.arena.read(root).children:
            assert rig.arena.read(index).depth == 1

    def test_nearest_intersection_helper(self):
        origin = Vector2D(0, 0)
        points = [Vector2D(3, 0), Vector2D(0, 1), Vector2D(-2, -2)]
        assert GrowthEngine.nearest_intersection(origin, points) == Vector2D(0, 1)
        assert GrowthEngine.nearest_intersection(origin, []) is None


class TestWholeTree:

    def test_long_run_keeps_arena_consistent(self):
        tree = Tree(Viewport(300, 300), GrowthConfig(random_seed=3, max_tree_depth=8))
        for _ in range(300):
            tree.tick()

        segments = tree.get_segments()
        assert len(segments) > 5
        for i, seg in enumerate(segments):
            for child_index in seg.children:
                assert child_index < len(segments)
                if i != 0:
                    assert segments[child_index].start == seg.end
