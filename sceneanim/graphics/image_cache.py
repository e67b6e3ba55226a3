"""
image_cache.py
--------------
Loaded-image cache keyed by asset identifier.

Asset ids are opaque; turning one into a file path is the job of a
caller-supplied resolver. Each id is loaded at most once per session;
ids that fail to load are remembered and drawn as a placeholder.
"""

import os

import pygame

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.runtime.anim_settings import Preview


class ImageCache:
    """Session-long cache of pygame surfaces."""

    def __init__(self, resolver=None):
        """
        Args:
            resolver: Callable mapping an asset id to a file path.
                      Defaults to using the id as a path.
        """
        self.resolver = resolver or (lambda asset_id: asset_id)
        self._images = {}       # {asset_id: Surface}
        self._missing = set()
        self._placeholders = {}  # {(w, h): Surface}

    def get(self, asset_id):
        """
        Return the surface for an asset id, or None if it cannot be loaded.

        Never raises; failures are logged once.
        """
        if not asset_id:
            return None
        if asset_id in self._images:
            return self._images[asset_id]
        if asset_id in self._missing:
            return None

        image = self._load(asset_id)
        if image is None:
            self._missing.add(asset_id)
        else:
            self._images[asset_id] = image
        return image

    def get_or_placeholder(self, asset_id, size):
        image = self.get(asset_id)
        return image if image is not None else self.placeholder(size)

    def placeholder(self, size):
        """Filled box with a border, cached per size."""
        key = (max(1, int(size[0])), max(1, int(size[1])))
        if key not in self._placeholders:
            surf = pygame.Surface(key, pygame.SRCALPHA)
            surf.fill(Preview.PLACEHOLDER_FILL)
            pygame.draw.rect(surf, Preview.PLACEHOLDER_BORDER, surf.get_rect(), Preview.BORDER_WIDTH)
            self._placeholders[key] = surf
        return self._placeholders[key]

    def preload(self, asset_ids):
        """Warm the cache (e.g. every frame of a sprite list) before playback."""
        return sum(1 for asset_id in asset_ids if self.get(asset_id) is not None)

    def is_loaded(self, asset_id) -> bool:
        return asset_id in self._images

    def clear(self):
        """Drop everything (call when a project is closed)."""
        self._images.clear()
        self._missing.clear()
        self._placeholders.clear()

    def __len__(self):
        return len(self._images)

    # ===========================================================
    # Loading
    # ===========================================================
    def _load(self, asset_id):
        try:
            path = self.resolver(asset_id)
        except Exception as e:
            DebugLogger.warn(f"Cannot resolve asset '{asset_id}': {e}", category="image_cache")
            return None

        if not path or not os.path.exists(path):
            DebugLogger.warn(f"Image not found: {asset_id} ({path})", category="image_cache")
            return None

        try:
            image = pygame.image.load(path).convert_alpha()
            DebugLogger.action(f"Loaded image '{asset_id}'", category="image_cache")
            return image
        except Exception as e:
            DebugLogger.warn(f"Failed to load image {path}: {e}", category="image_cache")
            return None
