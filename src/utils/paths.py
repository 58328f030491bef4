"""
Where SceneSync keeps its files.

    macOS    ~/Library/Application Support/SceneSync/
    Windows  %APPDATA%/SceneSync/
    Linux    ~/.local/share/scenesync/ (data, logs), ~/.config/scenesync/ (settings)

SCENESYNC_DATA_DIR overrides all of these with a single directory.
Every directory returned here already exists.
"""
import os
import sys
from pathlib import Path

APP_NAME = "SceneSync"
DATA_DIR_ENV = "SCENESYNC_DATA_DIR"


def _ensure(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _override_dir():
    value = os.getenv(DATA_DIR_ENV)
    return Path(value).expanduser() if value else None


def get_user_data_dir() -> Path:
    """Directory holding the database and the logs folder."""
    override = _override_dir()
    if override is not None:
        return _ensure(override)

    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support" / APP_NAME
    elif sys.platform == "win32":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    else:
        base = Path.home() / ".local" / "share" / APP_NAME.lower()
    return _ensure(base)


def get_user_config_dir() -> Path:
    """Directory holding settings.json. Only Linux separates it from the data directory."""
    if _override_dir() is not None or sys.platform in ("darwin", "win32"):
        return get_user_data_dir()
    return _ensure(Path.home() / ".config" / APP_NAME.lower())


def get_logs_dir() -> Path:
    return _ensure(get_user_data_dir() / "logs")


def get_database_path(db_name: str = "scenesync") -> Path:
    return get_user_data_dir() / f"{db_name}.db"


def get_settings_path() -> Path:
    return get_user_config_dir() / "settings.json"
