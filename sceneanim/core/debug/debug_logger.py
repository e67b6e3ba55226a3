"""
debug_logger.py
---------------
Diagnostic console logger with category filtering and formatted output.

Per-tick code paths must not flood the console: failures that repeat every
frame (a broken renderer, a missing sprite frame) go through ``warn_once``.
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Controls which components emit log messages and at what verbosity."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE

    CATEGORIES = {
        # Core
        "system": True,
        "loading": False,
        "config": True,
        "event_manager": False,

        # Animation engine
        "animation": True,
        "normalizer": True,
        "sprite": False,
        "scatter": True,
        "compositor": False,
        "driver": True,
        "scheduler": False,

        # Rendering
        "render": True,
        "image_cache": False,

        # Call sites
        "preview": True,
        "scene": True,
    }

    SHOW_TIMESTAMP = True
    SHOW_SOURCE = True

    @classmethod
    def apply(cls, settings):
        """
        Override switches from a config block, e.g. engine.json's "logging":
            {"enabled": true, "level": "VERBOSE", "categories": {"sprite": true}}
        Unknown keys are ignored.
        """
        if not isinstance(settings, dict):
            return
        if "enabled" in settings:
            cls.ENABLE_LOGGING = bool(settings["enabled"])
        level = str(settings.get("level", cls.LOG_LEVEL)).upper()
        if level in DebugLogger.LEVEL_VALUES:
            cls.LOG_LEVEL = level
        for category, enabled in (settings.get("categories") or {}).items():
            cls.CATEGORIES[category] = bool(enabled)


# ===========================================================
# ANSI Colors
# ===========================================================

class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger with category filtering and colored output."""

    LINE_LENGTH = 59

    # tag -> (color, level)
    TAGS = {
        "INIT": (Colors.WHITE, "INFO"),
        "SYSTEM": (Colors.MAGENTA, "INFO"),
        "STATE": (Colors.CYAN, "INFO"),
        "ACTION": (Colors.GREEN, "INFO"),
        "TRACE": (Colors.BLUE, "VERBOSE"),
        "WARN": (Colors.YELLOW, "WARN"),
        "FAIL": (Colors.RED, "ERROR"),
    }

    LEVEL_VALUES = {
        "NONE": 0,
        "ERROR": 1,
        "WARN": 2,
        "INFO": 3,
        "VERBOSE": 4
    }

    _warned = set()  # keys already reported by warn_once

    # ===========================================================
    # Caller Detection
    # ===========================================================

    @staticmethod
    def _get_caller() -> str:
        """Name of the class (or PascalCased module) that called the public method."""
        try:
            frame = sys._getframe(3)

            if 'self' in frame.f_locals:
                return frame.f_locals['self'].__class__.__name__
            if 'cls' in frame.f_locals:
                return frame.f_locals['cls'].__name__

            # scatter_simulator.py -> ScatterSimulator
            filename = frame.f_code.co_filename.replace("\\", "/").split("/")[-1]
            return "".join(p.capitalize() for p in filename[:-3].split("_"))

        except (ValueError, AttributeError, KeyError):
            return "Unknown"

    # ===========================================================
    # Core Logging
    # ===========================================================

    @staticmethod
    def enabled_for(category: str, level: str = "INFO") -> bool:
        """True if a message of this category and level would be printed."""
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        if not LoggerConfig.CATEGORIES.get(category, False):
            return False
        wanted = DebugLogger.LEVEL_VALUES.get(level, 3)
        allowed = DebugLogger.LEVEL_VALUES.get(LoggerConfig.LOG_LEVEL, 3)
        return wanted <= allowed

    @staticmethod
    def _log(tag: str, message: str, category: str):
        color, level = DebugLogger.TAGS[tag]
        if not DebugLogger.enabled_for(category, level):
            return

        parts = []
        if LoggerConfig.SHOW_TIMESTAMP:
            parts.append(f"[{datetime.now().strftime('%H:%M:%S')}]")
        if LoggerConfig.SHOW_SOURCE:
            parts.append(f"[{DebugLogger._get_caller()}]")
        parts.append(f"[{tag}]")
        print(f"{color}{' '.join(parts)} {message}{Colors.RESET}")

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def init(msg: str = "", category: str = "system"):
        """Initialization log. Empty message prints blank line."""
        if not msg.strip():
            print()
            return
        DebugLogger._log("INIT", msg, category)

    @staticmethod
    def system(msg: str, category: str = "system"):
        DebugLogger._log("SYSTEM", msg, category)

    @staticmethod
    def state(msg: str, category: str = "system"):
        """Lifecycle changes: start, stop, spawn, teardown."""
        DebugLogger._log("STATE", msg, category)

    @staticmethod
    def action(msg: str, category: str = "system"):
        DebugLogger._log("ACTION", msg, category)

    @staticmethod
    def trace(msg: str, category: str = "animation"):
        """Per-tick detail, printed at VERBOSE only."""
        DebugLogger._log("TRACE", msg, category)

    @staticmethod
    def warn(msg: str, category: str = "system"):
        DebugLogger._log("WARN", msg, category)

    @staticmethod
    def warn_once(key, msg: str, category: str = "system"):
        """Warn the first time ``key`` is seen; later calls are silent."""
        if key in DebugLogger._warned:
            return
        DebugLogger._warned.add(key)
        DebugLogger._log("WARN", msg, category)

    @staticmethod
    def reset_once():
        """Forget warn_once keys (call when a scene or preview restarts)."""
        DebugLogger._warned.clear()

    @staticmethod
    def fail(msg: str, category: str = "system"):
        DebugLogger._log("FAIL", msg, category)

    # ===========================================================
    # Report Formatting
    # ===========================================================

    @staticmethod
    def report(title: str, rows):
        """
        Print a titled block of dotted ``name ..... [status]`` rows,
        used for the scene summary printed when a scene loads.
        """
        if not LoggerConfig.ENABLE_LOGGING:
            return

        print(f"\n{Colors.WHITE}{'─' * DebugLogger.LINE_LENGTH}")
        print(f"[{title}]".center(DebugLogger.LINE_LENGTH) + Colors.RESET)
        for name, status in rows:
            print(DebugLogger._render_row(name, status))

    @staticmethod
    def _render_row(name: str, status: str) -> str:
        label = f"> {name}"
        status_str = f"[{status}]"
        dots = max(DebugLogger.LINE_LENGTH - len(label) - len(status_str) - 2, 1)
        color = Colors.GREEN if status != "static" else Colors.WHITE
        return f"{Colors.WHITE}{label} {'.' * dots} {color}{status_str}{Colors.RESET}"
