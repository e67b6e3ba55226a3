"""
sprite_player.py
----------------
Discrete frame playback for the "sprite" base animation.

The frame cursor advances on its own cadence (``spec.fps``), independent of
the continuous phase functions and of ``spec.speed``. Two sub-modes:

- frames: an explicit list of asset ids, one image per frame.
- sheet:  a single sheet image sliced into ``frameCount`` frames laid out
          horizontally, each ``frameWidth`` pixels wide.

At most one frame is advanced per tick: a late tick does not skip frames.
"""

from typing import NamedTuple, Optional, Tuple

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Timing


class SpriteSelection(NamedTuple):
    """Image to show and the sheet offset to show it at."""
    image_ref: str
    background_offset: Tuple[float, float] = (0.0, 0.0)


def frame_duration_ms(fps: float) -> float:
    """Milliseconds per frame; non-positive fps plays at 1 fps."""
    if fps <= 0:
        fps = 1.0
    return Timing.MS_PER_SECOND / fps


def advance(state, spec, now_ms: float) -> Optional[SpriteSelection]:
    """
    Advance the sprite cursor if a frame is due and return the selection.

    Args:
        state: AnimationRuntimeState of the entity.
        spec: AnimationSpec with base == "sprite".
        now_ms: Current tick timestamp (same clock as ``state.start_time``).

    Returns:
        SpriteSelection, or None when there is nothing to show (no frames
        and no sheet). None means "no image change".
    """
    frame_total = _frame_total(spec)
    if frame_total == 0:
        return None

    if state.sprite_selection is None:
        state.sprite_selection = _select(state, spec, state.sprite_frame_index % frame_total)

    if now_ms - state.last_frame_time < frame_duration_ms(spec.fps):
        return state.sprite_selection

    state.last_frame_time = now_ms
    state.sprite_frame_index = (state.sprite_frame_index + 1) % frame_total
    state.sprite_selection = _select(state, spec, state.sprite_frame_index)

    DebugLogger.trace(
        f"{state.entity_id}: sprite frame {state.sprite_frame_index}/{frame_total}",
        category="sprite"
    )
    return state.sprite_selection


# ===========================================================
# Helpers
# ===========================================================

def _frame_total(spec) -> int:
    mode = spec.sprite_mode
    if mode == "frames":
        return len(spec.frames)
    if mode == "sheet":
        return max(1, spec.frame_count)
    return 0


def _select(state, spec, index: int) -> SpriteSelection:
    if spec.sprite_mode == "frames":
        return SpriteSelection(spec.frames[index])

    # Sheet without frameWidth slices by the entity's own width
    frame_width = spec.frame_width or state.width or 0.0
    return SpriteSelection(spec.sprite_sheet, (-index * frame_width, 0.0))
