"""
loop_driver.py
--------------
Per-frame scheduler that advances every live animated entity of one
rendering surface and routes the resulting poses to a renderer.

Responsibilities
----------------
- Own the runtime state of every tracked entity (clocks, sprite cursors,
  scatter clones) for the lifetime of one Running period.
- Sample the clock once per tick so all entities share the same ``now``.
- Forward 1 + N render instructions per entity to the renderer.
- Tear down cleanly on stop: neutral poses, released clone handles, no
  pending frame callback.
- Guarantee fail-safety: a failing entity or renderer never stops the loop.

Renderer contract
-----------------
Any object with ``render(render_id, pose)`` and ``remove(render_id)``.
``render`` is called every tick, including for ids never seen before
(scatter clones); ``remove`` is called once per clone on teardown.

One driver per rendering surface (editor preview, game scene). Drivers share
no mutable state.
"""

import random
from enum import Enum

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Scatter
from sceneanim.core.runtime.frame_scheduler import FrameScheduler
from sceneanim.core.services.event_manager import (
    AnimationSpecChangedEvent,
    AnimationsToggledEvent,
    DriverStateChangedEvent,
    EntityRemovedEvent,
    SceneUnloadedEvent,
)
from sceneanim.graphics.animations import compositor, scatter_simulator
from sceneanim.graphics.animations.animation_spec import build_spec
from sceneanim.graphics.animations.animation_state import AnimatedEntity, AnimationRuntimeState
from sceneanim.graphics.animations.pose import Pose


class DriverState(Enum):
    """Lifecycle of a loop driver."""
    STOPPED = "stopped"
    RUNNING = "running"


class CallbackRenderer:
    """Adapts plain functions to the renderer contract."""

    def __init__(self, render, remove=None):
        self._render = render
        self._remove = remove

    def render(self, render_id, pose):
        self._render(render_id, pose)

    def remove(self, render_id):
        if self._remove is not None:
            self._remove(render_id)


class AnimationLoopDriver:
    """Drives all animated entities of one rendering surface."""

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, renderer, now_source, scheduler=None, rng=None,
                 bounds_half_extent: float = Scatter.BOUNDS_HALF_EXTENT,
                 enabled: bool = True, name: str = "driver"):
        """
        Args:
            renderer: Object honoring the renderer contract.
            now_source: Zero-arg callable returning the current time in ms.
            scheduler: FrameScheduler pumped by the host; one is created if None.
            rng: Random source for scatter clones (seed it for exact replays).
            bounds_half_extent: Scatter bounding box half size.
            enabled: Global animation switch; a disabled driver never runs.
            name: Label used in logs.
        """
        self.renderer = renderer
        self.now_source = now_source
        self.scheduler = scheduler or FrameScheduler(name)
        self.rng = rng or random.Random()
        self.bounds_half_extent = bounds_half_extent
        self.enabled = enabled
        self.name = name

        self.state = DriverState.STOPPED
        self._entities = {}     # {entity_id: AnimatedEntity}
        self._specs = {}        # {entity_id: AnimationSpec}
        self._states = {}       # {entity_id: AnimationRuntimeState}
        self._frame_handle = None
        self._run_token = 0
        self._events = None

        DebugLogger.init(f"AnimationLoopDriver '{name}' ready", category="driver")

    @property
    def is_running(self) -> bool:
        return self.state is DriverState.RUNNING

    def tracked_ids(self):
        """Ids of entities with live runtime state."""
        return list(self._states)

    def runtime_state(self, entity_id):
        return self._states.get(entity_id)

    def live_clone_handles(self):
        """Every clone render handle currently spawned."""
        return [h for state in self._states.values() for h in state.clone_handles()]

    # ===========================================================
    # Lifecycle
    # ===========================================================
    def start(self, entities=None) -> bool:
        """
        Begin animating ``entities`` (or the previously known set).

        Entities with a trivial spec are not tracked. Calling start while
        running restarts from t=0.

        Returns:
            bool: True if the driver is now running.
        """
        if self.is_running:
            self.stop()

        # The entity set is kept even while disabled
        if entities is not None:
            self._entities = {}
            self._specs = {}
            for entity in entities:
                self._register(entity)

        if not self.enabled:
            DebugLogger.state(f"[{self.name}] animations disabled - start ignored", category="driver")
            return False

        now = self.now_source()
        for entity_id in self._entities:
            self._activate(entity_id, now)

        self.state = DriverState.RUNNING
        self._run_token += 1
        self._schedule_next()

        DebugLogger.state(
            f"[{self.name}] started with {len(self._states)} animated entities",
            category="driver"
        )
        self._publish(True)
        return True

    def stop(self):
        """Cancel the loop, reset visuals to neutral and release every clone."""
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None

        released = 0
        for entity_id in list(self._states):
            released += self._deactivate(entity_id)

        was_running = self.is_running
        self.state = DriverState.STOPPED
        self._run_token += 1

        if was_running:
            DebugLogger.state(f"[{self.name}] stopped ({released} clones released)", category="driver")
            self._publish(False)

    def set_enabled(self, enabled: bool):
        """Global switch. Disabling a running driver stops it."""
        self.enabled = bool(enabled)
        if not self.enabled and self.is_running:
            self.stop()

    # ===========================================================
    # Entity Management
    # ===========================================================
    def add(self, entity):
        """Track a new entity; it starts animating at once if running."""
        entity_id = self._register(entity)
        if entity_id is not None and self.is_running:
            self._deactivate(entity_id)
            self._activate(entity_id, self.now_source())

    def remove(self, entity_id) -> bool:
        """Forget an entity, releasing its clones."""
        known = entity_id in self._entities
        self._deactivate(entity_id, reset_visual=False)
        self._entities.pop(entity_id, None)
        self._specs.pop(entity_id, None)
        return known

    def restart(self, entity_id, spec=None) -> bool:
        """
        Replay one entity from t=0, optionally with a new spec.

        Clones are released and re-randomized on the next tick.
        """
        entity = self._entities.get(entity_id)
        if entity is None:
            return False

        if spec is not None:
            entity.spec = spec
            self._specs[entity_id] = build_spec(spec)

        self._deactivate(entity_id)
        if self.is_running:
            self._activate(entity_id, self.now_source())
        return True

    # ===========================================================
    # Event Wiring
    # ===========================================================
    def bind_events(self, event_manager):
        """React to global toggles, scene unloads, spec edits and removals."""
        self.unbind_events()
        self._events = event_manager
        event_manager.subscribe(AnimationsToggledEvent, self._on_toggled)
        event_manager.subscribe(SceneUnloadedEvent, self._on_scene_unloaded)
        event_manager.subscribe(AnimationSpecChangedEvent, self._on_spec_changed)
        event_manager.subscribe(EntityRemovedEvent, self._on_entity_removed)

    def unbind_events(self):
        if self._events is not None:
            self._events.unsubscribe_all(self._on_toggled)
            self._events.unsubscribe_all(self._on_scene_unloaded)
            self._events.unsubscribe_all(self._on_spec_changed)
            self._events.unsubscribe_all(self._on_entity_removed)
            self._events = None

    def _on_toggled(self, event):
        self.set_enabled(event.enabled)

    def _on_scene_unloaded(self, event):
        self.stop()

    def _on_spec_changed(self, event):
        self.restart(event.entity_id, event.spec)

    def _on_entity_removed(self, event):
        self.remove(event.entity_id)

    # ===========================================================
    # Update Loop
    # ===========================================================
    def tick_once(self, now_ms=None) -> int:
        """
        Advance every tracked entity one frame.

        Args:
            now_ms: Override the clock sample (defaults to ``now_source()``).

        Returns:
            int: Number of render instructions sent.
        """
        if not self.is_running:
            return 0

        now = self.now_source() if now_ms is None else now_ms
        sent = 0

        # Render callbacks may remove entities (their own or others) mid-tick
        for entity_id, state in list(self._states.items()):
            if self._states.get(entity_id) is not state:
                continue
            try:
                result = compositor.tick(state, self._specs[entity_id], now, self.rng, self.bounds_half_extent)
                for render_id, pose in result.render_instructions(entity_id):
                    if self._states.get(entity_id) is not state:
                        break
                    self._send(render_id, pose)
                    sent += 1
            except Exception as e:
                DebugLogger.warn_once(
                    (self.name, "tick", entity_id),
                    f"[{self.name}] animation of '{entity_id}' failed → {e}", category="driver"
                )

        return sent

    def _on_frame(self, token):
        self._frame_handle = None
        if token != self._run_token or not self.is_running:
            return

        self.tick_once()

        if self.is_running and token == self._run_token:
            self._schedule_next()

    def _schedule_next(self):
        token = self._run_token
        self._frame_handle = self.scheduler.schedule(lambda: self._on_frame(token))

    # ===========================================================
    # Internals
    # ===========================================================
    def _register(self, entity):
        if isinstance(entity, dict):
            entity = AnimatedEntity.from_item(entity)

        entity_id = getattr(entity, "entity_id", None)
        if entity_id is None:
            DebugLogger.warn(f"[{self.name}] entity without id skipped: {entity!r}", category="driver")
            return None

        self._entities[entity_id] = entity
        self._specs[entity_id] = build_spec(entity.spec)
        return entity_id

    def _activate(self, entity_id, now):
        spec = self._specs[entity_id]
        if spec.is_trivial:
            return

        entity = self._entities[entity_id]
        self._states[entity_id] = AnimationRuntimeState(
            entity_id, now, getattr(entity, "width", None), getattr(entity, "height", None)
        )
        DebugLogger.trace(f"[{self.name}] '{entity_id}' active ({spec.base}, {list(spec.transforms)})",
                          category="driver")

    def _deactivate(self, entity_id, reset_visual: bool = True) -> int:
        state = self._states.pop(entity_id, None)
        if state is None:
            return 0

        released = scatter_simulator.release_clones(state, self._release)
        if reset_visual:
            self._send(entity_id, Pose.neutral())
        return released

    def _send(self, render_id, pose):
        try:
            self.renderer.render(render_id, pose)
        except Exception as e:
            DebugLogger.warn_once(
                (self.name, "render", render_id),
                f"[{self.name}] render of '{render_id}' failed → {e}", category="render"
            )

    def _release(self, render_id):
        self.renderer.remove(render_id)

    def _publish(self, running):
        if self._events is not None:
            self._events.dispatch(DriverStateChangedEvent(self.name, running, len(self._states)))
