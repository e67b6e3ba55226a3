"""
conftest.py
-----------
Shared pytest configuration and fixtures for sceneanim tests.

Contains:
- Global pygame mocking (the engine is tested without a display)
- A controllable millisecond clock
- A recording renderer honoring the render / remove contract
- Seeded random sources for reproducible scatter clones
"""

import random
import sys
from unittest.mock import MagicMock

import pytest

# Mock pygame globally before any imports that might use it
mock_pygame = MagicMock()
sys.modules["pygame"] = mock_pygame
sys.modules["pygame.display"] = MagicMock()
sys.modules["pygame.transform"] = MagicMock()
sys.modules["pygame.image"] = MagicMock()
sys.modules["pygame.draw"] = MagicMock()
sys.modules["pygame.time"] = MagicMock()
sys.modules["pygame.event"] = MagicMock()

# Mock pygame constants
mock_pygame.SRCALPHA = 32
mock_pygame.QUIT = 256
mock_pygame.KEYDOWN = 768
mock_pygame.K_ESCAPE = 27
mock_pygame.K_SPACE = 32

from sceneanim.core.runtime.frame_scheduler import FrameScheduler  # noqa: E402


# ===========================================================
# Test Doubles
# ===========================================================

class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


class RecordingRenderer:
    """Renderer that records every instruction and tracks live render ids."""

    def __init__(self):
        self.calls = []        # [(render_id, pose)]
        self.removed = []      # [render_id]
        self.live = set()

    def render(self, render_id, pose):
        self.calls.append((render_id, pose))
        self.live.add(render_id)

    def remove(self, render_id):
        self.removed.append(render_id)
        self.live.discard(render_id)

    def poses_for(self, render_id):
        return [pose for rid, pose in self.calls if rid == render_id]

    def last_pose(self, render_id):
        poses = self.poses_for(render_id)
        return poses[-1] if poses else None

    def live_clone_ids(self):
        return {rid for rid in self.live if "#clone" in rid}


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture
def clock():
    """Clock starting at t=0 ms."""
    return FakeClock()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def scheduler():
    return FrameScheduler("test")


@pytest.fixture
def rng():
    """Seeded random source so clone trajectories are reproducible."""
    return random.Random(1234)


@pytest.fixture
def engine_config():
    """Engine config without touching config/engine.json."""
    return {"enabled": True, "bounds_half_extent": 100.0}


# ===========================================================
# Pytest Configuration
# ===========================================================

def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Add markers automatically."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
