"""
Settings management for SceneSync

Persistent application settings (database location, log level, playback and
keyframe defaults) stored as JSON in the user config directory.
"""

import json
import os
from typing import Any, Optional

from src.utils.message import Log
from src.utils.paths import get_settings_path, get_database_path


DEFAULT_SETTINGS = {
    # Storage
    "database_path": None,  # None -> platform default (see get_database_path)
    "persist_keyframes": True,

    # Logging
    "log_level": "INFO",

    # Playback
    "seek_step_seconds": 5.0,
    "default_volume": 1.0,

    # Editor
    "default_keyframe_color": "#f59e0b",
    "confirm_scene_deletion": True,
}


class Settings:
    """Application settings manager"""

    def __init__(self, settings_file: Optional[str] = None):
        self.settings_file = settings_file or str(get_settings_path())
        self.settings = DEFAULT_SETTINGS.copy()
        self.load_settings()

    def load_settings(self):
        """Load settings from file, writing defaults on first run"""
        if not os.path.exists(self.settings_file):
            self.save_settings()
            Log.info("Created new settings file with defaults")
            return

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as file:
                saved_settings = json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            Log.error(f"Failed to load settings: {e}")
            self.settings = DEFAULT_SETTINGS.copy()
            return

        if not isinstance(saved_settings, dict):
            Log.warning(f"Ignoring malformed settings file: {self.settings_file}")
            return

        self.settings.update(saved_settings)
        Log.debug("Settings loaded successfully")

    def save_settings(self):
        """Save settings to file"""
        try:
            os.makedirs(os.path.dirname(self.settings_file) or ".", exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as file:
                json.dump(self.settings, file, indent=4)
        except OSError as e:
            Log.error(f"Failed to save settings: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        return self.settings.get(key, default)

    def set(self, key: str, value: Any):
        """Set a setting value and persist it"""
        self.settings[key] = value
        self.save_settings()

    @property
    def database_path(self) -> str:
        return self.get("database_path") or str(get_database_path())

    @property
    def seek_step_seconds(self) -> float:
        return float(self.get("seek_step_seconds", 5.0))

    @property
    def default_volume(self) -> float:
        return min(1.0, max(0.0, float(self.get("default_volume", 1.0))))
