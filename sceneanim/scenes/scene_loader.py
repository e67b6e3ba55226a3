"""
scene_loader.py
---------------
Reads item records out of scene / item JSON files.

Accepted layouts:
    {"items": [{"name": "lamp", ...}, ...]}
    {"items": {"lamp": {...}, ...}}          (name taken from the key)
    {"lamp": {...}, "key": {...}}             (bare item table)
"""

from sceneanim.core.debug.debug_logger import DebugLogger
from sceneanim.core.services.config_manager import load_config


def load_scene_items(filename, strict=False):
    """
    Load the item records of a scene file.

    Args:
        filename: Scene or items JSON file (indexed name or path).
        strict: Raise FileNotFoundError when the file is missing.

    Returns:
        list[dict]: Item records, each with a 'name'.
    """
    data = load_config(filename, default_dict={}, strict=strict)
    items = extract_items(data)
    DebugLogger.system(f"{filename}: {len(items)} items", category="scene")
    return items


def extract_items(data):
    """Item records from any accepted layout."""
    raw = data.get("items", data) if isinstance(data, dict) else data

    if isinstance(raw, dict):
        records = []
        for name, item in raw.items():
            if isinstance(item, dict):
                records.append({"name": name, **item})
        return records

    if isinstance(raw, list):
        records = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                continue
            if not item.get("name"):
                DebugLogger.warn(f"Item #{index} has no name - skipped", category="scene")
                continue
            records.append(dict(item))
        return records

    return []
