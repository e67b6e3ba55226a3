"""
Core services exports.

Provides configuration loading and the event system.
"""

from sceneanim.core.services.config_manager import load_config, load_engine_config
from sceneanim.core.services.event_manager import (
    get_events,
    BaseEvent,
    AnimationsToggledEvent,
    SceneUnloadedEvent,
    AnimationSpecChangedEvent,
    EntityRemovedEvent,
    DriverStateChangedEvent,
    EventManager,
)

__all__ = [
    # Config
    'load_config',
    'load_engine_config',
    # Events
    'get_events',
    'BaseEvent',
    'AnimationsToggledEvent',
    'SceneUnloadedEvent',
    'AnimationSpecChangedEvent',
    'EntityRemovedEvent',
    'DriverStateChangedEvent',
    'EventManager',
]
