"""
test_scatter_simulator.py
-------------------------
Tests for the scatter clone simulation behind the "random" base animation.

Covers:
1. Reflection and clamping at the bounding box
2. Velocity magnitude conserved across reflection
3. Seeded spawns are reproducible
4. Clone handles are released on teardown
"""

import math
import random

import pytest

from sceneanim.graphics.animations import scatter_simulator
from sceneanim.graphics.animations.animation_spec import build_spec
from sceneanim.graphics.animations.animation_state import AnimationRuntimeState, CloneBody


def make_clone(x=0.0, y=0.0, vx=0.0, vy=0.0, rotation_speed=0.0):
    return CloneBody(x, y, vx, vy, 0.0, rotation_speed, "item#clone0")


@pytest.fixture
def scatter_spec():
    return build_spec({"base": "random", "count": 4, "randomness": 50, "rotation": 5})


# ===========================================================
# Step
# ===========================================================

class TestStepClone:

    def test_reflects_and_clamps_x(self):
        clone = make_clone(x=99, vx=5)
        scatter_simulator.step_clone(clone, 100)
        assert clone.x == 100
        assert clone.vx == -5

    def test_reflects_and_clamps_negative_y(self):
        clone = make_clone(y=-98, vy=-4)
        scatter_simulator.step_clone(clone, 100)
        assert clone.y == -100
        assert clone.vy == 4

    def test_landing_exactly_on_bound_does_not_reflect(self):
        clone = make_clone(x=95, vx=5)
        scatter_simulator.step_clone(clone, 100)
        assert clone.x == 100
        assert clone.vx == 5

    def test_axes_reflect_independently(self):
        clone = make_clone(x=99, y=0, vx=5, vy=3)
        scatter_simulator.step_clone(clone, 100)
        assert (clone.vx, clone.vy) == (-5, 3)
        assert clone.y == 3

    def test_speed_conserved_across_reflection(self):
        clone = make_clone(x=90, y=-90, vx=7, vy=-11)
        before = math.hypot(clone.vx, clone.vy)
        for _ in range(200):
            scatter_simulator.step_clone(clone, 100)
            assert math.hypot(clone.vx, clone.vy) == pytest.approx(before)
            assert -100 <= clone.x <= 100
            assert -100 <= clone.y <= 100

    def test_rotation_accumulates(self):
        clone = make_clone(rotation_speed=1.5)
        for _ in range(4):
            scatter_simulator.step_clone(clone)
        assert clone.angle == pytest.approx(6.0)


# ===========================================================
# Spawn
# ===========================================================

class TestSpawn:

    def test_spawns_count_clones_inside_bounds(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        clones = scatter_simulator.spawn_clones(state, scatter_spec, rng, 100)

        assert len(clones) == 4
        assert state.clones is clones
        for clone in clones:
            assert -100 <= clone.x <= 100
            assert -100 <= clone.y <= 100

    def test_handles_are_indexed_per_entity(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        scatter_simulator.spawn_clones(state, scatter_spec, rng)
        assert state.clone_handles() == [f"lamp#clone{i}" for i in range(4)]

    def test_same_seed_same_clones(self, scatter_spec):
        a = AnimationRuntimeState("lamp", 0)
        b = AnimationRuntimeState("lamp", 0)
        scatter_simulator.spawn_clones(a, scatter_spec, random.Random(7))
        scatter_simulator.spawn_clones(b, scatter_spec, random.Random(7))
        assert [(c.x, c.y, c.vx, c.vy, c.angle) for c in a.clones] == \
               [(c.x, c.y, c.vx, c.vy, c.angle) for c in b.clones]

    def test_speed_scales_with_randomness_and_speed(self, rng):
        spec = build_spec({"base": "random", "count": 20, "randomness": 50, "speed": 2})
        state = AnimationRuntimeState("lamp", 0)
        scatter_simulator.spawn_clones(state, spec, rng)

        # U(0.5, 1.0) * speed * randomness / 10
        for clone in state.clones:
            assert 5.0 - 1e-9 <= math.hypot(clone.vx, clone.vy) <= 10.0 + 1e-9

    def test_zero_rotation_means_no_spin(self, rng):
        spec = build_spec({"base": "random", "count": 3, "rotation": 0})
        state = AnimationRuntimeState("lamp", 0)
        scatter_simulator.spawn_clones(state, spec, rng)
        assert all(clone.rotation_speed == 0.0 for clone in state.clones)

    def test_zero_count_spawns_nothing(self, rng):
        spec = build_spec({"base": "random", "count": 0})
        state = AnimationRuntimeState("lamp", 0)
        assert scatter_simulator.spawn_clones(state, spec, rng) == []


# ===========================================================
# Advance / Teardown
# ===========================================================

class TestAdvance:

    def test_first_advance_spawns_then_steps(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        first = scatter_simulator.advance(state, scatter_spec, rng)
        spawned = [(c.x, c.y) for c in state.clones]

        assert [pose.translate_x for _, pose in first] == [x for x, _ in spawned]

        scatter_simulator.advance(state, scatter_spec, rng)
        moved = [(c.x, c.y) for c in state.clones]
        assert moved != spawned

    def test_clone_poses_not_interactive(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        for handle, pose in scatter_simulator.advance(state, scatter_spec, rng):
            assert scatter_simulator.is_clone_handle(handle)
            assert scatter_simulator.owner_of(handle) == "lamp"
            assert pose.interactive is False
            assert pose.opacity == 1.0

    def test_release_clones(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        scatter_simulator.advance(state, scatter_spec, rng)
        released = []

        count = scatter_simulator.release_clones(state, released.append)

        assert count == 4
        assert released == [f"lamp#clone{i}" for i in range(4)]
        assert state.clones is None
        assert state.clone_handles() == []

    def test_release_survives_failing_remove(self, scatter_spec, rng):
        state = AnimationRuntimeState("lamp", 0)
        scatter_simulator.advance(state, scatter_spec, rng)

        def broken(handle):
            raise RuntimeError("surface gone")

        assert scatter_simulator.release_clones(state, broken) == 4
        assert state.clones is None


class TestHandles:

    def test_owner_of_plain_id(self):
        assert scatter_simulator.owner_of("lamp") == "lamp"
        assert not scatter_simulator.is_clone_handle("lamp")
