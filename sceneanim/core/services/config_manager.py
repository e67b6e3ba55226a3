"""
config_manager.py
-----------------
JSON loader for engine switches, scene files and item records.

Features:
- Finds files by bare name through a lazily built index of the config tree
- Extra search roots for project folders opened at runtime
- Recursive merge onto defaults, '_notes' keys dropped
- Engine config validated so a hand-edited engine.json cannot break the loop
"""

import os
import json

from sceneanim.core.debug.debug_logger import DebugLogger, LoggerConfig
from sceneanim.core.runtime.anim_settings import Scatter


# ===========================================================
# Configuration
# ===========================================================

DATA_ROOT = "config"

SEARCH_DIRS = [
    ".",
    DATA_ROOT,
    os.path.join(DATA_ROOT, "items"),
    os.path.join(DATA_ROOT, "scenes"),
]

ENGINE_CONFIG = "engine.json"

ENGINE_DEFAULTS = {
    "enabled": True,
    "bounds_half_extent": Scatter.BOUNDS_HALF_EXTENT,
    "logging": {},
}

_FILE_INDEX = None   # {file name: path}, built on first lookup
_EXTRA_DIRS = []     # project folders added with add_search_dir


# ===========================================================
# Public API
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Load a JSON object and merge it onto defaults.

    Args:
        filename: Bare name ("hall", "hall.json"), relative or absolute path.
        default_dict: Values used where the file is silent.
        strict: Raise FileNotFoundError instead of falling back to defaults.

    Returns:
        dict: New dict; ``default_dict`` is never modified.
    """
    defaults = default_dict or {}
    filename = os.fspath(filename)
    path = filename if os.path.isabs(filename) else _resolve_search_path(filename)

    try:
        data = _load_json(path)
    except (OSError, ValueError) as e:
        if strict:
            raise FileNotFoundError(f"Config not found: {filename}") from e
        DebugLogger.warn(f"Failed to load {path}: {e} - using defaults", category="config")
        return _merge_dicts(defaults, {})

    if not isinstance(data, dict):
        DebugLogger.warn(f"{path} is not a JSON object - using defaults", category="config")
        return _merge_dicts(defaults, {})
    return _merge_dicts(defaults, data)


def load_engine_config():
    """
    Load engine.json: global enable switch, scatter bounds, logger overrides.

    Invalid values are replaced by defaults. The "logging" block is applied
    to LoggerConfig as a side effect.
    """
    config = load_config(ENGINE_CONFIG, default_dict=ENGINE_DEFAULTS)

    bounds = config.get("bounds_half_extent")
    if isinstance(bounds, bool) or not isinstance(bounds, (int, float)) or bounds <= 0:
        DebugLogger.warn(f"Invalid bounds_half_extent {bounds!r} - using "
                         f"{Scatter.BOUNDS_HALF_EXTENT}", category="config")
        config["bounds_half_extent"] = Scatter.BOUNDS_HALF_EXTENT
    config["enabled"] = bool(config.get("enabled", True))

    LoggerConfig.apply(config.get("logging"))
    return config


def add_search_dir(directory):
    """Index an extra folder (an opened project's config tree)."""
    directory = os.fspath(directory)
    if directory not in _EXTRA_DIRS:
        _EXTRA_DIRS.append(directory)
        rebuild_file_index()


def build_file_index():
    """Map every .json file under the search directories to its path; first hit wins."""
    global _FILE_INDEX
    _FILE_INDEX = {}

    for directory in _EXTRA_DIRS + SEARCH_DIRS:
        if not os.path.isdir(directory):
            continue
        for root, _, files in os.walk(directory):
            for file in files:
                if file.endswith(".json"):
                    _FILE_INDEX.setdefault(file, os.path.join(root, file))

    DebugLogger.init(f"Config index: {len(_FILE_INDEX)} files", category="loading")


def rebuild_file_index():
    """Re-scan after files were added while the editor runs."""
    global _FILE_INDEX
    _FILE_INDEX = None
    build_file_index()


def get_indexed_files():
    if _FILE_INDEX is None:
        build_file_index()
    return dict(_FILE_INDEX)


# ===========================================================
# Path Resolution
# ===========================================================

def _resolve_search_path(filename):
    """Indexed path for a bare name (with or without .json); other input unchanged."""
    if _FILE_INDEX is None:
        build_file_index()

    name = filename.replace("\\", "/").lstrip("/")
    for key in (name, name + ".json"):
        if key in _FILE_INDEX:
            return _FILE_INDEX[key]
    return name


# ===========================================================
# File Loading
# ===========================================================

def _load_json(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)}", category="loading")
    return data


def _merge_dicts(default, override):
    """Recursive merge returning new dicts at every level. Ignores '_notes' keys."""
    merged = {
        key: _merge_dicts(value, {}) if isinstance(value, dict) else value
        for key, value in default.items()
    }
    for key, value in override.items():
        if key == "_notes":
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
