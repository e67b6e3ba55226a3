"""
animation_state.py
------------------
Mutable runtime records owned by the loop driver.

Contains
--------
- AnimatedEntity: what a call site hands to the driver (id, raw spec, size).
- CloneBody: one scatter body of the "random" base animation.
- AnimationRuntimeState: per-entity clocks, sprite cursor and clone list.
"""

from typing import Any, List, Optional


class AnimatedEntity:
    """An entity the driver can animate."""

    __slots__ = ("entity_id", "spec", "width", "height")

    def __init__(self, entity_id: str, spec: Any = None, width: Optional[float] = None,
                 height: Optional[float] = None):
        self.entity_id = entity_id
        self.spec = spec
        self.width = width
        self.height = height

    @classmethod
    def from_item(cls, item: dict) -> "AnimatedEntity":
        """Build from an item record ({'name', 'size', 'animation', ...})."""
        size = item.get("size") or (None, None)
        width, height = (list(size) + [None, None])[:2]
        return cls(item.get("name"), item.get("animation"), width, height)

    def __repr__(self):
        return f"AnimatedEntity({self.entity_id!r})"


class CloneBody:
    """Independently simulated scatter body."""

    __slots__ = ("x", "y", "vx", "vy", "angle", "rotation_speed", "render_handle")

    def __init__(self, x, y, vx, vy, angle, rotation_speed, render_handle):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.angle = angle
        self.rotation_speed = rotation_speed
        self.render_handle = render_handle

    def __repr__(self):
        return (f"CloneBody({self.render_handle!r}, x={self.x:.2f}, y={self.y:.2f}, "
                f"vx={self.vx:.2f}, vy={self.vy:.2f}, angle={self.angle:.1f})")


class AnimationRuntimeState:
    """Clocks and cursors for one animated entity instance."""

    __slots__ = (
        "entity_id",         # Owning entity (prefix of clone render handles)
        "start_time",        # ms timestamp the animation began
        "last_frame_time",   # ms timestamp of last sprite frame advance
        "sprite_frame_index",
        "sprite_selection",  # Last SpriteSelection, re-emitted on no-op ticks
        "clones",            # None until the scatter layer spawns
        "width",
        "height",
    )

    def __init__(self, entity_id: str, start_time: float, width: Optional[float] = None,
                 height: Optional[float] = None):
        self.entity_id = entity_id
        self.width = width
        self.height = height
        self.reset(start_time)

    def reset(self, start_time: float):
        """Rewind every clock to t=0. Clone handles must be released first."""
        self.start_time = start_time
        self.last_frame_time = start_time
        self.sprite_frame_index = 0
        self.sprite_selection = None
        self.clones = None

    def clone_handles(self) -> List[str]:
        return [clone.render_handle for clone in self.clones or ()]
