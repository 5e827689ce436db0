"""
Settings management for Gitlanes
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from gitlanes.constants import DEFAULT_PAGE_SIZE, DEFAULT_WINDOW_SIZE, SETTINGS_FILE


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS = {
        "history": {
            "page_size": DEFAULT_PAGE_SIZE,  # Commits fetched per page
            "all": False,  # Walk every ref instead of HEAD
            "branch": None,  # Start from this branch instead of HEAD
        },
        "ui": {
            "window_size": list(DEFAULT_WINDOW_SIZE),
        },
        "logging": {"level": "WARNING"},
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path(SETTINGS_FILE).expanduser()

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_settings(base[key], value)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'history.page_size')"""
        value: Any = self.settings

        for part in path.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_page_size(self) -> int:
        """Get the number of commits fetched per history page (at least 1)."""
        try:
            page_size = int(self.get("history.page_size", DEFAULT_PAGE_SIZE))
        except (TypeError, ValueError):
            page_size = DEFAULT_PAGE_SIZE
        return max(1, page_size)

    def get_branch(self) -> str | None:
        branch = self.get("history.branch")
        return str(branch) if branch else None

    def get_all_refs(self) -> bool:
        return bool(self.get("history.all", False))

    def get_window_size(self) -> tuple[int, int]:
        """Get the initial window size, falling back to 1000x800 for bad values."""
        try:
            width, height = self.get("ui.window_size", DEFAULT_WINDOW_SIZE)
            width, height = int(width), int(height)
        except (TypeError, ValueError):
            width, height = DEFAULT_WINDOW_SIZE
        return max(1, width), max(1, height)

    def get_log_level(self) -> int:
        """Get the logging level, falling back to WARNING for unknown names."""
        level = logging.getLevelName(str(self.get("logging.level", "WARNING")).upper())
        return level if isinstance(level, int) else logging.WARNING
