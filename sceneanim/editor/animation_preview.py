"""
animation_preview.py
--------------------
Live animation preview shown next to the item editor form.

Toggling the preview off and on replays it from the beginning: clocks reset
to t=0 and scatter clones are re-randomized.
"""

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.frame_scheduler import FrameScheduler, pygame_clock_ms
from sceneanim.core.services.config_manager import load_engine_config
from sceneanim.graphics.animations.animation_spec import build_spec
from sceneanim.graphics.animations.animation_state import AnimatedEntity
from sceneanim.graphics.animations.loop_driver import AnimationLoopDriver
from sceneanim.graphics.image_cache import ImageCache
from sceneanim.graphics.render_adapters import PreviewCanvasRenderer


class AnimationPreview:
    """Editor-side preview of one item's animation."""

    def __init__(self, image_cache=None, now_source=None, scheduler=None, rng=None, config=None):
        config = config if config is not None else load_engine_config()

        self.renderer = PreviewCanvasRenderer(image_cache or ImageCache())
        self.scheduler = scheduler or FrameScheduler("preview")
        self.driver = AnimationLoopDriver(
            self.renderer,
            now_source or pygame_clock_ms,
            scheduler=self.scheduler,
            rng=rng,
            bounds_half_extent=config.get("bounds_half_extent", 100.0),
            enabled=config.get("enabled", True),
            name="preview",
        )
        self.item = None

    @property
    def is_running(self) -> bool:
        return self.driver.is_running

    def start(self, item):
        """
        Preview an item record ({'image', 'size', 'animation'}).

        Returns:
            bool: True if the driver started (False when animations are disabled).
        """
        self.item = dict(item or {})
        spec = build_spec(self.item.get("animation"))
        size = self.item.get("size") or (None, None)

        frame_size = None
        if spec.sprite_sheet:
            frame_size = (spec.frame_width or size[0] or 1, spec.frame_height or size[1] or 1)
        self.renderer.set_item(self.item.get("image"), frame_size)

        entity = AnimatedEntity(PreviewCanvasRenderer.PREVIEW_ID, spec, size[0], size[1])
        started = self.driver.start([entity])

        DebugLogger.state(f"Preview started: base={spec.base} transforms={list(spec.transforms)}",
                          category="preview")
        return started

    def update(self, animation):
        """Restart the preview with edited animation settings."""
        item = dict(self.item or {})
        item["animation"] = animation
        return self.start(item)

    def stop(self):
        self.driver.stop()

    def toggle(self):
        """Stop if playing, otherwise replay from the beginning."""
        if self.driver.is_running:
            self.stop()
            return False
        return self.start(self.item)

    def frame(self, surface=None):
        """Pump one frame and redraw the canvas."""
        self.scheduler.run_pending()
        return self.renderer.draw(surface)
