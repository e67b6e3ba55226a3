"""
scene_animation_layer.py
------------------------
Animated item layer of a live game scene.

Responsibilities
----------------
- Register every item of the loaded scene with the scene renderer.
- Run one loop driver for the scene; stop it (with full clone teardown)
  when the scene unloads.
- Apply item edits: changing an item's animation replays it from t=0.
"""

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.frame_scheduler import FrameScheduler, pygame_clock_ms
from sceneanim.core.services.config_manager import load_engine_config
from sceneanim.core.services.event_manager import SceneUnloadedEvent
from sceneanim.graphics.animations.animation_spec import build_spec
from sceneanim.graphics.animations.loop_driver import AnimationLoopDriver
from sceneanim.graphics.image_cache import ImageCache
from sceneanim.graphics.render_adapters import SceneLayerRenderer


class SceneAnimationLayer:
    """Owns the scene renderer and its loop driver."""

    def __init__(self, image_cache=None, now_source=None, scheduler=None, rng=None,
                 events=None, config=None):
        """
        Args:
            image_cache: Shared ImageCache (a fresh one if None).
            now_source: Clock in ms (pygame ticks if None).
            scheduler: FrameScheduler pumped by ``update``.
            rng: Random source for scatter clones.
            events: EventManager to bind the driver to.
            config: Engine config dict (loaded from engine.json if None).
        """
        config = config if config is not None else load_engine_config()

        self.renderer = SceneLayerRenderer(image_cache or ImageCache())
        self.scheduler = scheduler or FrameScheduler("scene")
        self.driver = AnimationLoopDriver(
            self.renderer,
            now_source or pygame_clock_ms,
            scheduler=self.scheduler,
            rng=rng,
            bounds_half_extent=config.get("bounds_half_extent", 100.0),
            enabled=config.get("enabled", True),
            name="scene",
        )
        self.events = events
        if events is not None:
            self.driver.bind_events(events)

        self.scene_id = None
        self.items = {}  # {name: item record}

    # ===========================================================
    # Scene Lifecycle
    # ===========================================================
    def load_scene(self, items, scene_id=None):
        """Replace the current scene and start animating its items."""
        if self.scene_id is not None or self.items:
            self.unload_scene()

        self.scene_id = scene_id
        for item in items:
            name = item.get("name")
            if not name:
                continue
            self.items[name] = dict(item)
            self.renderer.register_item(self.items[name])

        DebugLogger.reset_once()
        started = self.driver.start(list(self.items.values()))
        DebugLogger.report(f"Scene {scene_id}", [
            (name, _describe(item.get("animation"))) for name, item in self.items.items()
        ])
        DebugLogger.state(
            f"Scene '{scene_id}' loaded: {len(self.items)} items, "
            f"{len(self.driver.tracked_ids())} animated (running={started})",
            category="scene"
        )

    def unload_scene(self):
        """Stop animations, release every clone, forget the items."""
        scene_id = self.scene_id
        self.driver.stop()
        for name in list(self.items):
            self.renderer.unregister(name)
        self.items.clear()
        self.scene_id = None

        if self.events is not None and scene_id is not None:
            self.events.dispatch(SceneUnloadedEvent(scene_id))

        DebugLogger.state(f"Scene '{scene_id}' unloaded", category="scene")

    # ===========================================================
    # Item Edits
    # ===========================================================
    def add_item(self, item):
        name = item.get("name")
        if not name:
            return
        self.items[name] = dict(item)
        self.renderer.register_item(self.items[name])
        self.driver.add(self.items[name])

    def remove_item(self, name):
        """Remove an item and every clone it spawned."""
        self.driver.remove(name)
        self.renderer.unregister(name)
        self.items.pop(name, None)

    def update_item(self, name, new_data):
        """Merge new data into an item; a new animation replays from t=0."""
        item = self.items.get(name)
        if item is None:
            return False

        item.update(new_data)
        if any(key in new_data for key in ("image", "position", "size", "animation")):
            self.renderer.register_item(item)

        if "animation" in new_data:
            self.driver.restart(name, new_data["animation"] or {})
        return True

    # ===========================================================
    # Frame
    # ===========================================================
    def update(self):
        """Pump one frame of the driver."""
        self.scheduler.run_pending()

    def draw(self, surface):
        self.renderer.draw(surface)

    def set_enabled(self, enabled):
        self.driver.set_enabled(enabled)
        if enabled and not self.driver.is_running and self.items:
            self.driver.start()


def _describe(animation) -> str:
    """Short label for the scene report: "sprite+bob", "none+spin", "static"."""
    spec = build_spec(animation)
    if spec.is_trivial:
        return "static"
    return "+".join((spec.base,) + spec.transforms)
