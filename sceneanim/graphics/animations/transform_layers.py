"""
transform_layers.py
-------------------
Transform modifiers layered on top of any base animation.

Each layer writes one channel of the pose and nothing else, so layers are
independent and their order in ``spec.transforms`` does not matter:
translation and rotation add, scale multiplies, opacity is assigned.
"""

from sceneanim.graphics.animations.animation_registry import register_transform
from sceneanim.graphics.animations.animation_utils import anim_phase


@register_transform("bob")
def apply_bob(pose, spec, t):
    pose.translate_y += anim_phase.bob(t, spec.bob_amplitude)


@register_transform("pulse")
def apply_pulse(pose, spec, t):
    factor = anim_phase.pulse(t, spec.pulse_amplitude)
    pose.scale_x *= factor
    pose.scale_y *= factor


@register_transform("spin")
def apply_spin(pose, spec, t):
    pose.rotation_degrees += anim_phase.spin(t, spec.speed)


@register_transform("fade")
def apply_fade(pose, spec, t):
    pose.opacity = anim_phase.fade(t, spec.fade_min, spec.fade_max)
