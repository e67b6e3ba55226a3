"""
render_adapters.py
------------------
Pygame render adapters that apply engine poses to drawables.

Responsibilities
----------------
- Keep one drawable per render id (entities and their scatter clones).
- Apply a pose verbatim: translate, scale, rotate, opacity, image, sheet offset.
- Create clone drawables on first sight, copying the owning entity.
- Forget drawables when told to remove them.

Adapters
--------
- SceneLayerRenderer: game scene layer, items placed by their position/size.
- PreviewCanvasRenderer: editor preview, one item centered on a small canvas.
"""

import pygame

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Preview, Scene
from sceneanim.graphics.animations.animation_spec import build_spec
from sceneanim.graphics.animations.pose import Pose
from sceneanim.graphics.animations.scatter_simulator import is_clone_handle, owner_of


class Drawable:
    """Render-side record for one render id."""

    __slots__ = ("image_ref", "center", "size", "frame_size", "pose")

    def __init__(self, image_ref, center, size, pose=None, frame_size=None):
        self.image_ref = image_ref
        self.center = center
        self.size = size
        self.frame_size = frame_size  # sheet frame size in sheet pixels, None if not a sheet
        self.pose = pose or Pose.neutral()

    def copy(self):
        return Drawable(self.image_ref, self.center, self.size, self.pose.copy(), self.frame_size)


class PoseRenderer:
    """Base adapter honoring the renderer contract (render / remove)."""

    def __init__(self, image_cache):
        self.images = image_cache
        self._drawables = {}  # {render_id: Drawable}, draw order = insertion order

    # ===========================================================
    # Renderer Contract
    # ===========================================================
    def render(self, render_id, pose):
        drawable = self._drawables.get(render_id)
        if drawable is None:
            drawable = self._create(render_id)
            self._drawables[render_id] = drawable

        drawable.pose = pose
        if pose.image_ref:
            drawable.image_ref = pose.image_ref

    def remove(self, render_id):
        self._drawables.pop(render_id, None)

    # ===========================================================
    # Bookkeeping
    # ===========================================================
    def register(self, render_id, image_ref, center, size, frame_size=None):
        """Declare the resting image, center and size of a render target."""
        self._drawables[render_id] = Drawable(
            image_ref, tuple(center), tuple(size), frame_size=tuple(frame_size) if frame_size else None
        )

    def unregister(self, render_id):
        """Drop an entity together with any clones it spawned."""
        for rid in list(self._drawables):
            if rid == render_id or (is_clone_handle(rid) and owner_of(rid) == render_id):
                del self._drawables[rid]

    def pose_of(self, render_id):
        drawable = self._drawables.get(render_id)
        return drawable.pose if drawable else None

    def render_ids(self):
        return list(self._drawables)

    def clone_count(self) -> int:
        return sum(1 for rid in self._drawables if is_clone_handle(rid))

    def is_interactive(self, render_id) -> bool:
        drawable = self._drawables.get(render_id)
        return bool(drawable and drawable.pose.interactive and drawable.pose.opacity > 0)

    def _create(self, render_id):
        if is_clone_handle(render_id):
            owner = self._drawables.get(owner_of(render_id))
            if owner is not None:
                return owner.copy()

        DebugLogger.trace(f"Unregistered render id '{render_id}' - using defaults", category="render")
        return Drawable(None, self.default_center(), Scene.DEFAULT_ITEM_SIZE)

    def default_center(self):
        return (0, 0)

    # ===========================================================
    # Drawing
    # ===========================================================
    def compose(self, drawable):
        """
        Build the transformed surface for one drawable.

        Returns:
            (Surface, Rect) or None when fully transparent.
        """
        pose = drawable.pose
        if pose.opacity <= 0:
            return None

        width, height = drawable.size
        base = self.images.get_or_placeholder(drawable.image_ref, drawable.size)

        # Sprite sheet: crop the current frame out of the sheet
        if drawable.frame_size:
            offset_x, offset_y = pose.background_offset
            frame_w, frame_h = drawable.frame_size
            frame_rect = pygame.Rect(int(-offset_x), int(-offset_y), int(frame_w), int(frame_h))
            frame_rect = frame_rect.clip(base.get_rect())
            if frame_rect.width > 0 and frame_rect.height > 0:
                base = base.subsurface(frame_rect)

        scaled_size = (max(1, int(width * pose.scale_x)), max(1, int(height * pose.scale_y)))
        image = pygame.transform.smoothscale(base, scaled_size)

        # Poses rotate clockwise, pygame rotates counter-clockwise
        if pose.rotation_degrees:
            image = pygame.transform.rotate(image, -pose.rotation_degrees)

        if pose.opacity < 1.0:
            image.set_alpha(int(255 * pose.opacity))

        center = (drawable.center[0] + pose.translate_x, drawable.center[1] + pose.translate_y)
        return image, image.get_rect(center=center)

    def draw(self, surface):
        """Blit every drawable onto ``surface`` in insertion order."""
        for render_id, drawable in list(self._drawables.items()):
            try:
                composed = self.compose(drawable)
                if composed is not None:
                    surface.blit(*composed)
            except Exception as e:
                DebugLogger.warn_once(("draw", render_id), f"Failed to draw '{render_id}': {e}", category="render")


class SceneLayerRenderer(PoseRenderer):
    """Game scene layer: items placed at their authored position and size."""

    def register_item(self, item: dict):
        """Register an item record ({'name', 'position', 'size', 'image'})."""
        width, height = item.get("size") or Scene.DEFAULT_ITEM_SIZE
        left, top = item.get("position") or (0, 0)

        spec = build_spec(item.get("animation"))
        frame_size = None
        if spec.sprite_sheet:
            frame_size = (spec.frame_width or width, spec.frame_height or height)

        self.register(
            item.get("name"), item.get("image"),
            (left + width / 2, top + height / 2), (width, height), frame_size
        )


class PreviewCanvasRenderer(PoseRenderer):
    """Editor preview: one item centered in a fixed-size canvas."""

    PREVIEW_ID = "preview"

    def __init__(self, image_cache):
        super().__init__(image_cache)
        self.canvas = pygame.Surface((Preview.WIDTH, Preview.HEIGHT))

    def default_center(self):
        return (Preview.WIDTH / 2, Preview.HEIGHT / 2)

    def set_item(self, image_ref=None, frame_size=None, render_id=PREVIEW_ID):
        """Show an item (or the placeholder box when it has no image)."""
        self._drawables.clear()
        box = (Preview.BOX_SIZE, Preview.BOX_SIZE)
        self.register(render_id, image_ref, self.default_center(), box, frame_size)

    def draw(self, surface=None):
        """Redraw the canvas; optionally blit it onto ``surface``."""
        self.canvas.fill(Preview.BACKGROUND)
        super().draw(self.canvas)
        if surface is not None:
            surface.blit(self.canvas, (0, 0))
        return self.canvas
