"""
pose.py
-------
Per-tick visual output for one render target.

A Pose is plain data. Render adapters apply it verbatim to whatever drawable
they own; the engine itself never touches a drawable.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass
class Pose:
    """Offsets, scale, rotation, opacity and image selection for one target."""
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_degrees: float = 0.0
    opacity: float = 1.0
    image_ref: Optional[str] = None              # None = keep whatever is shown
    background_offset: Tuple[float, float] = (0.0, 0.0)
    interactive: bool = True

    @classmethod
    def neutral(cls) -> "Pose":
        """No offset, no scale, no rotation, full opacity."""
        return cls()

    @classmethod
    def suppressed(cls) -> "Pose":
        """Hidden and non-interactive (primary of a scatter animation)."""
        return cls(opacity=0.0, interactive=False)

    def copy(self) -> "Pose":
        return replace(self)
