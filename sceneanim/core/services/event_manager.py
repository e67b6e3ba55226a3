"""
event_manager.py
----------------
Pub-sub channel between loop drivers and the editor / game code around them.

Inbound events tell a bound driver what happened to its surface (global
toggle, scene unload, spec edit, entity removal). The driver publishes
DriverStateChangedEvent back so UI such as a "preview playing" indicator can
follow it without polling.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from sceneanim.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class AnimationsToggledEvent(BaseEvent):
    """Animations were globally enabled or disabled."""
    enabled: bool


@dataclass(frozen=True)
class SceneUnloadedEvent(BaseEvent):
    """The owning scene or editor panel was torn down."""
    scene_id: str


@dataclass(frozen=True)
class AnimationSpecChangedEvent(BaseEvent):
    """An entity's animation config was edited; ``spec`` is the new raw record."""
    entity_id: str
    spec: Any = None


@dataclass(frozen=True)
class EntityRemovedEvent(BaseEvent):
    """An animated entity left the scene."""
    entity_id: str


@dataclass(frozen=True)
class DriverStateChangedEvent(BaseEvent):
    """A loop driver started or stopped."""
    driver_name: str
    running: bool
    entity_count: int = 0


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Type-keyed subscriber lists; delivery is synchronous and fail-safe."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.init("EventManager ready", category="event_manager")

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> Callable:
        """
        Call ``callback(event)`` for every dispatched ``event_type``.
        Subscribing the same callback twice has no effect.

        Returns:
            Callable: Zero-arg function that undoes this subscription.
        """
        subscribers = self._subscribers.setdefault(event_type, [])
        if callback not in subscribers:
            subscribers.append(callback)
            DebugLogger.system(
                f"{_name_of(callback)} listens to {event_type.__name__}",
                category="event_manager"
            )
        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        subscribers = self._subscribers.get(event_type, [])
        if callback in subscribers:
            subscribers.remove(callback)

    def unsubscribe_all(self, callback: Callable) -> None:
        """Drop ``callback`` from every event type."""
        for event_type in list(self._subscribers):
            self.unsubscribe(event_type, callback)

    def dispatch(self, event: BaseEvent) -> int:
        """
        Deliver ``event`` to a snapshot of its subscribers.

        A failing subscriber is logged and skipped.

        Returns:
            int: Number of subscribers that handled the event without raising.
        """
        delivered = 0
        for callback in list(self._subscribers.get(type(event), ())):
            try:
                callback(event)
                delivered += 1
            except Exception as e:
                DebugLogger.warn(
                    f"{_name_of(callback)} failed on {type(event).__name__}: {e}",
                    category="event_manager"
                )
        return delivered

    def clear_all(self) -> None:
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """Subscribers of one event type, or of all types when None."""
        if event_type is not None:
            return len(self._subscribers.get(event_type, ()))
        return sum(len(subs) for subs in self._subscribers.values())


def _name_of(callback) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


# ===========================================================
# Shared Instance
# ===========================================================

_EVENTS = None


def get_events() -> EventManager:
    """Process-wide event manager, created on first use."""
    global _EVENTS
    if _EVENTS is None:
        _EVENTS = EventManager()
    return _EVENTS


def reset_events() -> None:
    """Forget the shared instance (editor reloads a project)."""
    global _EVENTS
    _EVENTS = None
