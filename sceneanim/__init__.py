"""
sceneanim - layered animation engine for scene items.

Turns an item's declarative animation config plus a time sample into poses
(offset, scale, rotation, opacity, image) and drives them once per frame for
the editor preview and the game scene.
"""

from sceneanim.graphics.animations.animation_spec import AnimationSpec, build_spec, normalize
from sceneanim.graphics.animations.animation_state import AnimatedEntity, AnimationRuntimeState
from sceneanim.graphics.animations.compositor import TickResult, tick
from sceneanim.graphics.animations.loop_driver import AnimationLoopDriver, CallbackRenderer, DriverState
from sceneanim.graphics.animations.pose import Pose

__version__ = "0.1.0"
__all__ = [
    'AnimationSpec',
    'build_spec',
    'normalize',
    'AnimatedEntity',
    'AnimationRuntimeState',
    'TickResult',
    'tick',
    'AnimationLoopDriver',
    'CallbackRenderer',
    'DriverState',
    'Pose',
]
