"""
Runtime exports.

Provides engine constants and the per-frame scheduler.
"""

from sceneanim.core.runtime.anim_settings import Defaults, Scatter, Timing, Preview, Scene
from sceneanim.core.runtime.frame_scheduler import FrameScheduler, pygame_clock_ms

__all__ = [
    'Defaults',
    'Scatter',
    'Timing',
    'Preview',
    'Scene',
    'FrameScheduler',
    'pygame_clock_ms',
]
