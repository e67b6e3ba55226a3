"""
Scene exports.

Provides the animated item layer of a game scene and scene file loading.
"""

from sceneanim.scenes.scene_animation_layer import SceneAnimationLayer
from sceneanim.scenes.scene_loader import load_scene_items

__all__ = [
    'SceneAnimationLayer',
    'load_scene_items',
]
