"""
anim_phase.py
-------------
Pure phase functions mapping time to a scalar visual offset.

Responsibilities
----------------
- Produce the bob / pulse / spin / fade signals from normalized time.
- Stay stateless: the same inputs always give the same output, so calling
  them on every tick (even when nothing changed) is harmless.

Time convention
---------------
``t`` is *speed-folded* time in seconds: ``elapsed_ms * speed / 1000``
(see ``phase_time``). bob, pulse and fade use ``t`` directly. spin multiplies
by ``speed`` a second time, giving a base angular rate of 60 deg/s at
speed 1 and ``60 * speed**2`` deg/s of wall-clock time otherwise. That
double application is what shipped item files were authored against, so it
is reproduced literally here.
"""

import math

from sceneanim.core.runtime.anim_settings import Timing


def phase_time(elapsed_ms: float, speed: float) -> float:
    """Elapsed milliseconds -> speed-folded seconds."""
    return elapsed_ms * speed / Timing.MS_PER_SECOND


def _wave(t: float) -> float:
    return math.sin(t * Timing.PHASE_FREQUENCY)


# ===========================================================
#  BOB (vertical offset, pixels)
# ===========================================================
def bob(t: float, amplitude: float) -> float:
    """translateY offset in [-amplitude, amplitude]."""
    return _wave(t) * amplitude


# ===========================================================
#  PULSE (uniform scale factor)
# ===========================================================
def pulse(t: float, amplitude: float) -> float:
    """Scale factor; amplitude is a percentage (10 = +/-10%)."""
    return 1.0 + _wave(t) * amplitude / 100.0


# ===========================================================
#  SPIN (rotation, degrees)
# ===========================================================
def spin(t: float, speed: float) -> float:
    """Rotation in [0, 360). Speed is applied on top of speed-folded t."""
    return (t * Timing.SPIN_DEGREES_PER_SECOND * speed) % 360.0


# ===========================================================
#  FADE (opacity)
# ===========================================================
def fade(t: float, fade_min: float, fade_max: float) -> float:
    """Opacity oscillating in [fade_min, fade_max]."""
    return fade_min + (_wave(t) * 0.5 + 0.5) * (fade_max - fade_min)
