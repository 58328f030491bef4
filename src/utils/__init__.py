"""
Utils module - Logging, paths, settings and time formatting.

Contents:
- message.py: Log class for application logging
- paths.py: Platform-specific path utilities
- settings.py: Persistent JSON settings
- time_format.py: mm:ss display helpers
"""
from src.utils.message import Log
from src.utils.paths import (
    get_user_data_dir,
    get_user_config_dir,
    get_logs_dir,
    get_database_path,
    get_settings_path,
)
from src.utils.time_format import format_clock, format_transport

__all__ = [
    'Log',
    'get_user_data_dir',
    'get_user_config_dir',
    'get_logs_dir',
    'get_database_path',
    'get_settings_path',
    'format_clock',
    'format_transport',
]
