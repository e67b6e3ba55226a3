"""
anim_settings.py
----------------
Centralized constants for the animation engine and its render adapters.
"""


# ===========================================================
# Spec Defaults
# ===========================================================

class Defaults:
    """Fallback values substituted for missing animation parameters."""
    SPEED: float = 1.0
    FPS: float = 12.0
    FRAME_COUNT: int = 1

    # Random (scatter) base
    COUNT: int = 5
    RANDOMNESS: float = 50.0
    ROTATION: float = 5.0
    ROTATION_MAX: float = 9.0

    # Transform modifiers
    BOB_AMPLITUDE: float = 10.0
    PULSE_AMPLITUDE: float = 10.0
    FADE_MIN: float = 0.5
    FADE_MAX: float = 1.0


# ===========================================================
# Scatter Simulation
# ===========================================================

class Scatter:
    """Bounding box and spawn ranges for the random base animation."""
    BOUNDS_HALF_EXTENT: float = 100.0
    SPEED_MIN: float = 0.5
    SPEED_MAX: float = 1.0
    ROTATION_SPREAD: float = 0.5   # rotationSpeed ~ U(-spread, spread) * rotation
    VELOCITY_DIVISOR: float = 10.0


# ===========================================================
# Timing
# ===========================================================

class Timing:
    """Clock and host-loop timing."""
    MS_PER_SECOND: float = 1000.0
    HOST_FPS: int = 60

    # Phase functions
    PHASE_FREQUENCY: float = 2.0     # sin(t * 2)
    SPIN_DEGREES_PER_SECOND: float = 60.0


# ===========================================================
# Editor Preview
# ===========================================================

class Preview:
    """Editor preview canvas layout."""
    WIDTH: int = 200
    HEIGHT: int = 200
    BOX_SIZE: int = 80
    BACKGROUND = (26, 26, 46)
    PLACEHOLDER_FILL = (74, 158, 255)
    PLACEHOLDER_BORDER = (107, 176, 255)
    BORDER_WIDTH: int = 2


# ===========================================================
# Game Scene
# ===========================================================

class Scene:
    """Virtual canvas of the game scene."""
    WIDTH: int = 1280
    HEIGHT: int = 720
    CAPTION: str = "Scene Preview"
    BACKGROUND = (10, 10, 40)
    DEFAULT_ITEM_SIZE = (50, 50)
