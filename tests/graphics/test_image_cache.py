"""
test_image_cache.py
-------------------
Tests for the session image cache (pygame mocked).
"""

from unittest.mock import MagicMock, patch

import pytest

from sceneanim.graphics.image_cache import ImageCache


@pytest.fixture
def mock_pg():
    with patch("sceneanim.graphics.image_cache.pygame") as pg:
        yield pg


@pytest.fixture
def asset(tmp_path):
    path = tmp_path / "hero.png"
    path.write_bytes(b"png")
    return path


class TestLoading:

    def test_loads_once(self, mock_pg, asset):
        cache = ImageCache()
        first = cache.get(str(asset))
        second = cache.get(str(asset))

        assert first is second
        assert first is mock_pg.image.load.return_value.convert_alpha.return_value
        mock_pg.image.load.assert_called_once_with(str(asset))
        assert cache.is_loaded(str(asset))
        assert len(cache) == 1

    def test_resolver_maps_ids_to_paths(self, mock_pg, asset):
        cache = ImageCache(resolver=lambda asset_id: str(asset.parent / asset_id))
        assert cache.get("hero.png") is not None
        mock_pg.image.load.assert_called_once_with(str(asset))

    def test_missing_file_remembered(self, mock_pg, tmp_path):
        resolver = MagicMock(return_value=str(tmp_path / "missing.png"))
        cache = ImageCache(resolver)

        assert cache.get("missing.png") is None
        assert cache.get("missing.png") is None
        resolver.assert_called_once()
        mock_pg.image.load.assert_not_called()

    def test_load_error_returns_none(self, mock_pg, asset):
        mock_pg.image.load.side_effect = RuntimeError("corrupt")
        assert ImageCache().get(str(asset)) is None

    def test_failing_resolver_returns_none(self, mock_pg):
        def resolver(asset_id):
            raise KeyError(asset_id)

        assert ImageCache(resolver).get("hero.png") is None

    @pytest.mark.parametrize("asset_id", [None, ""])
    def test_empty_id(self, mock_pg, asset_id):
        assert ImageCache().get(asset_id) is None

    def test_preload_counts_loaded(self, mock_pg, asset, tmp_path):
        cache = ImageCache()
        assert cache.preload([str(asset), str(tmp_path / "nope.png")]) == 1

    def test_clear(self, mock_pg, asset):
        cache = ImageCache()
        cache.get(str(asset))
        cache.clear()
        assert len(cache) == 0


class TestPlaceholder:

    def test_placeholder_for_missing(self, mock_pg):
        cache = ImageCache()
        image = cache.get_or_placeholder(None, (40, 30))
        assert image is cache.placeholder((40, 30))
        mock_pg.Surface.assert_called_once_with((40, 30), mock_pg.SRCALPHA)

    def test_placeholder_cached_per_size(self, mock_pg):
        cache = ImageCache()
        cache.placeholder((10, 10))
        cache.placeholder((10.4, 10.2))
        cache.placeholder((20, 10))
        assert mock_pg.Surface.call_count == 2
