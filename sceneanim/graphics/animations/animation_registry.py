"""
animation_registry.py
---------------------
Transform layer registration.
All registration happens at import time of the layer module.

Performance:
- O(1) dict lookup for layer functions
- Unknown names resolve to None (the compositor skips them)
"""

import inspect

from sceneanim.core.debug.debug_logger import DebugLogger

# Global registry: {transform_name: function(pose, spec, t)}
registry = {}


def register_transform(name: str = None):
    """
    Decorator to register a transform layer.

    Args:
        name: Transform name as it appears in ``spec.transforms``.
              If None, uses the function name.

    Usage:
        @register_transform("bob")
        def apply_bob(pose, spec, t):
            pose.translate_y += bob(t, spec.bob_amplitude)
    """

    def decorator(func):
        sig = inspect.signature(func)
        if len(sig.parameters) < 3:
            DebugLogger.warn(
                f"Invalid signature for {func.__name__}: "
                f"needs (pose, spec, t) parameters, got {list(sig.parameters.keys())}",
                category="animation"
            )
            return func

        layer_name = name or func.__name__

        if layer_name in registry:
            DebugLogger.warn(f"Overwriting transform layer '{layer_name}'", category="animation")

        registry[layer_name] = func
        DebugLogger.state(
            f"Registered transform [{layer_name}] -> {func.__name__}",
            category="loading"
        )
        return func

    return decorator


def get_transform(name: str):
    """Layer function for a transform name, or None."""
    return registry.get(name)


def get_registered_transforms():
    """All registered transform names."""
    return tuple(registry)
