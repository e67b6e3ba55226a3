"""
test_scene_loader.py
--------------------
Tests for reading item records out of scene files.
"""

import json

import pytest

from sceneanim.core.services import config_manager
from sceneanim.scenes.scene_loader import extract_items, load_scene_items


class TestExtractItems:

    def test_item_list(self):
        data = {"items": [{"name": "lamp", "animation": {"type": "bob"}}]}
        assert extract_items(data) == [{"name": "lamp", "animation": {"type": "bob"}}]

    def test_item_table_names_from_keys(self):
        data = {"items": {"lamp": {"size": [10, 10]}, "key": {}}}
        assert extract_items(data) == [
            {"name": "lamp", "size": [10, 10]},
            {"name": "key"},
        ]

    def test_bare_item_table(self):
        assert extract_items({"lamp": {"image": "lamp.png"}}) == [
            {"name": "lamp", "image": "lamp.png"}
        ]

    def test_unnamed_and_malformed_skipped(self):
        data = {"items": [{"image": "x.png"}, "junk", {"name": "ok"}]}
        assert extract_items(data) == [{"name": "ok"}]

    @pytest.mark.parametrize("data", [None, 5, "items", {"items": 3}])
    def test_unusable_data(self, data):
        assert extract_items(data) == []


class TestLoadSceneItems:

    def test_loads_from_scenes_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(config_manager, "_FILE_INDEX", None)
        scenes = tmp_path / "config" / "scenes"
        scenes.mkdir(parents=True)
        (scenes / "hall.json").write_text(json.dumps({
            "items": [{"name": "lamp", "animation": {"base": "random", "count": 2}}]
        }), encoding="utf-8")

        items = load_scene_items("hall")

        assert [item["name"] for item in items] == ["lamp"]

    def test_missing_scene(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(config_manager, "_FILE_INDEX", None)

        assert load_scene_items("nowhere.json") == []
        with pytest.raises(FileNotFoundError):
            load_scene_items("nowhere.json", strict=True)
