"""
frame_scheduler.py
------------------
Per-frame callback registry pumped by a host loop.

Callbacks are one-shot, like requestAnimationFrame: a callback that wants to
run every frame schedules itself again. Callbacks scheduled while the queue is
being pumped run on the next pump, never in the same one.
"""

from itertools import count

import pygame

from sceneanim.core.debug.debug_logger import DebugLogger


def pygame_clock_ms():
    """Milliseconds since pygame.init(); default clock of pygame hosts."""
    return pygame.time.get_ticks()


class FrameScheduler:
    """Queue of callbacks to run on the next frame."""

    def __init__(self, name: str = "frames"):
        self.name = name
        self._pending = {}          # {handle: callback}, insertion ordered
        self._handles = count(1)

    def schedule(self, callback) -> int:
        """Queue a callback for the next pump. Returns a cancel handle."""
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle) -> bool:
        """Drop a queued callback. Returns False if it already ran or never existed."""
        return self._pending.pop(handle, None) is not None

    def run_pending(self) -> int:
        """
        Run every callback queued before this call.

        Returns:
            int: Number of callbacks run.
        """
        batch = self._pending
        self._pending = {}

        for handle, callback in batch.items():
            try:
                callback()
            except Exception as e:
                DebugLogger.warn(f"[{self.name}] frame callback {handle} failed → {e}", category="scheduler")
        return len(batch)

    def clear(self):
        self._pending.clear()

    @property
    def pending_count(self) -> int:
        return len(self._pending)
