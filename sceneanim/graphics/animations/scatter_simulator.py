"""
scatter_simulator.py
--------------------
Multi-body simulation behind the "random" base animation.

Responsibilities
----------------
- Spawn ``spec.count`` clone bodies on first use, with random offset,
  heading, speed and spin drawn from an injectable random source.
- Step every clone once per tick, reflecting off a square bounding box
  centered on the owning entity (not wrapping around).
- Produce one pose per clone; the owning entity's own pose is suppressed
  by the compositor while clones exist.
- Release every clone render handle on teardown.

Motion is per tick, not per second: velocities are pixels per tick.
"""

import math
import random

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Scatter
from sceneanim.graphics.animations.animation_state import CloneBody
from sceneanim.graphics.animations.pose import Pose


def clone_handle(entity_id: str, index: int) -> str:
    """Render id of the index-th clone of an entity."""
    return f"{entity_id}#clone{index}"


def is_clone_handle(render_id: str) -> bool:
    return "#clone" in str(render_id)


def owner_of(render_id: str) -> str:
    """Entity id owning a clone render id (the id itself for non-clones)."""
    return str(render_id).split("#clone", 1)[0]


# ===========================================================
# Spawn
# ===========================================================

def spawn_clones(state, spec, rng=None, bounds_half_extent: float = Scatter.BOUNDS_HALF_EXTENT):
    """
    Create the clone bodies for an entity.

    Args:
        state: AnimationRuntimeState; ``state.clones`` is replaced.
        spec: AnimationSpec with base == "random".
        rng: Object with ``uniform(a, b)``; defaults to the ``random`` module.
        bounds_half_extent: Spawn offsets are drawn inside this box.

    Returns:
        list[CloneBody]
    """
    rng = rng or random
    clones = []

    for i in range(max(0, spec.count)):
        x = rng.uniform(-bounds_half_extent, bounds_half_extent)
        y = rng.uniform(-bounds_half_extent, bounds_half_extent)

        heading = rng.uniform(0.0, 2.0 * math.pi)
        velocity = (rng.uniform(Scatter.SPEED_MIN, Scatter.SPEED_MAX)
                    * spec.speed * spec.randomness / Scatter.VELOCITY_DIVISOR)

        angle = rng.uniform(0.0, 360.0)
        if spec.rotation == 0:
            rotation_speed = 0.0
        else:
            rotation_speed = rng.uniform(-Scatter.ROTATION_SPREAD, Scatter.ROTATION_SPREAD) * spec.rotation

        clones.append(CloneBody(
            x=x,
            y=y,
            vx=math.cos(heading) * velocity,
            vy=math.sin(heading) * velocity,
            angle=angle,
            rotation_speed=rotation_speed,
            render_handle=clone_handle(state.entity_id, i),
        ))

    state.clones = clones
    DebugLogger.state(f"{state.entity_id}: spawned {len(clones)} scatter clones", category="scatter")
    return clones


# ===========================================================
# Step
# ===========================================================

def step_clone(clone: CloneBody, bounds_half_extent: float = Scatter.BOUNDS_HALF_EXTENT):
    """Move one clone a single tick, reflecting each axis independently."""
    clone.x += clone.vx
    clone.y += clone.vy

    if clone.x < -bounds_half_extent or clone.x > bounds_half_extent:
        clone.vx = -clone.vx
        clone.x = max(-bounds_half_extent, min(bounds_half_extent, clone.x))

    if clone.y < -bounds_half_extent or clone.y > bounds_half_extent:
        clone.vy = -clone.vy
        clone.y = max(-bounds_half_extent, min(bounds_half_extent, clone.y))

    clone.angle += clone.rotation_speed


def clone_pose(clone: CloneBody) -> Pose:
    """translate(x, y) rotate(angle), fully opaque, never interactive."""
    return Pose(
        translate_x=clone.x,
        translate_y=clone.y,
        rotation_degrees=clone.angle,
        interactive=False,
    )


def advance(state, spec, rng=None, bounds_half_extent: float = Scatter.BOUNDS_HALF_EXTENT):
    """
    Advance the scatter simulation one tick.

    The first call spawns and reports the spawn positions; later calls step.

    Returns:
        list[tuple[str, Pose]]: (clone render handle, pose) per clone.
    """
    if state.clones is None:
        spawn_clones(state, spec, rng, bounds_half_extent)
    else:
        for clone in state.clones:
            step_clone(clone, bounds_half_extent)

    return [(clone.render_handle, clone_pose(clone)) for clone in state.clones]


# ===========================================================
# Teardown
# ===========================================================

def release_clones(state, release) -> int:
    """
    Release every clone render handle and drop the simulation.

    Args:
        state: AnimationRuntimeState.
        release: Callable taking a render handle (renderer.remove).

    Returns:
        int: Number of handles released.
    """
    handles = state.clone_handles()
    for handle in handles:
        try:
            release(handle)
        except Exception as e:
            DebugLogger.warn(f"Failed to release clone '{handle}': {e}", category="scatter")

    state.clones = None
    if handles:
        DebugLogger.state(f"{state.entity_id}: released {len(handles)} scatter clones", category="scatter")
    return len(handles)
