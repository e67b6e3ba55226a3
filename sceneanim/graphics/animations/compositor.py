"""
compositor.py
-------------
Turns one animated entity plus one time sample into concrete poses.

Responsibilities
----------------
- Run the base layer (sprite player or scatter simulator, never both).
- Apply every registered transform layer on top.
- Return poses as data; drawing them is the caller's job.

Multiplicity
------------
``tick`` returns a ``TickResult``. Its ``pose`` is the entity's own pose.
For the "random" base, ``pose`` is suppressed (opacity 0, non-interactive)
and ``clones`` carries one ``(render_id, Pose)`` per scatter body: a single
entity tick fans out into 1 + N render instructions. For every other base
``clones`` is empty.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from sceneanim.core.runtime.anim_settings import Scatter
from sceneanim.graphics.animations import scatter_simulator, sprite_player
from sceneanim.graphics.animations import transform_layers  # noqa: F401  (registers layers)
from sceneanim.graphics.animations.animation_registry import get_transform
from sceneanim.graphics.animations.animation_spec import BASE_RANDOM, BASE_SPRITE
from sceneanim.graphics.animations.animation_utils.anim_phase import phase_time
from sceneanim.graphics.animations.pose import Pose


class TickResult(NamedTuple):
    """Primary pose plus zero or more clone poses."""
    pose: Pose
    clones: Sequence[Tuple[str, Pose]] = ()

    def render_instructions(self, entity_id: str) -> List[Tuple[str, Pose]]:
        """Flatten into (render_id, pose) pairs, primary first."""
        return [(entity_id, self.pose)] + list(self.clones)


def tick(state, spec, now_ms: float, rng=None,
         bounds_half_extent: float = Scatter.BOUNDS_HALF_EXTENT) -> TickResult:
    """
    Compute the poses of one entity for one time sample.

    Args:
        state: AnimationRuntimeState of the entity.
        spec: AnimationSpec (already built).
        now_ms: Tick timestamp; every entity in a tick gets the same value.
        rng: Random source for scatter spawning.
        bounds_half_extent: Scatter bounding box half size.

    Returns:
        TickResult
    """
    t = phase_time(now_ms - state.start_time, spec.speed)
    pose = Pose()
    clones = []

    if spec.base == BASE_SPRITE:
        selection = sprite_player.advance(state, spec, now_ms)
        if selection is not None:
            pose.image_ref = selection.image_ref
            pose.background_offset = selection.background_offset

    elif spec.base == BASE_RANDOM:
        clones = scatter_simulator.advance(state, spec, rng, bounds_half_extent)

    _apply_transforms(pose, spec, t)

    if clones:
        for _, clone in clones:
            _apply_transforms(clone, spec, t)
        pose = Pose.suppressed()

    return TickResult(pose, clones)


def compose(spec, t: float, pose: Optional[Pose] = None) -> Pose:
    """Transform layers only, at speed-folded time ``t``. Stateless."""
    pose = pose if pose is not None else Pose()
    _apply_transforms(pose, spec, t)
    return pose


def _apply_transforms(pose: Pose, spec, t: float):
    for name in spec.transforms:
        layer = get_transform(name)
        if layer is not None:
            layer(pose, spec, t)
