"""
Application logging.

Log is a class-level facade (Log.info(...), Log.error(...)) over one stdlib
logger named "SceneSyncLogger". Console output is colorized with colorama;
each run also writes a timestamped file in the user logs directory unless
SCENESYNC_FILE_LOGGING is set to 0.
"""
import logging
import os
import sys
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import Optional

from colorama import init, Fore, Style
init(autoreset=True)

LOGGER_NAME = "SceneSyncLogger"
LOG_FILE_PREFIX = "scenesync_"
KEEP_LOG_FILES = 10


class ColorFormatter(logging.Formatter):
    """Colorizes the level name of console records."""
    color_map = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.LIGHTRED_EX,
    }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        # Copy so file handlers don't receive the escape codes
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def _file_logging_enabled() -> bool:
    return os.getenv("SCENESYNC_FILE_LOGGING", "1").lower() not in ("0", "false", "no")


def purge_old_logs(log_folder: Path, keep: int = KEEP_LOG_FILES) -> None:
    """Delete all but the newest `keep` log files (names sort chronologically)."""
    logs = sorted(log_folder.glob(f"{LOG_FILE_PREFIX}*.log"))
    for old_file in logs[:-keep] if keep else logs:
        old_file.unlink()


def _file_handler(log_folder: Optional[str], level: int) -> logging.Handler:
    if log_folder is None:
        from src.utils.paths import get_logs_dir
        folder = get_logs_dir()
    else:
        folder = Path(log_folder)
        folder.mkdir(parents=True, exist_ok=True)

    purge_old_logs(folder)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    handler = logging.FileHandler(folder / f"{LOG_FILE_PREFIX}{timestamp}.log", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    return handler


def init_logger(
    name: str = LOGGER_NAME,
    log_folder: Optional[str] = None,
    console_logging: bool = True,
    file_logging: bool = True,
    level: int = logging.DEBUG
) -> Logger:
    """
    Configure a logger with a colorized stderr handler and a per-run file.

    Safe to call more than once for the same name; handlers are only added
    the first time.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        return logger

    if file_logging:
        logger.addHandler(_file_handler(log_folder, level))

    if console_logging:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColorFormatter(
            fmt="%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

    return logger


class Log:
    """Application-wide logging facade."""
    _logger: Logger = init_logger(file_logging=_file_logging_enabled())

    @classmethod
    def set_logger(cls, logger: Logger):
        cls._logger = logger

    @classmethod
    def set_level(cls, level: str | int):
        """
        Set the level of the logger and all of its handlers.

        Unknown level names fall back to INFO.
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO

        cls._logger.setLevel(level)
        for handler in cls._logger.handlers:
            handler.setLevel(level)

    @classmethod
    def debug(cls, text: str):
        cls._logger.debug(text)

    @classmethod
    def info(cls, text: str):
        cls._logger.info(text)

    @classmethod
    def warning(cls, text: str, exc_info: bool = False):
        cls._logger.warning(text, exc_info=exc_info)

    @classmethod
    def error(cls, text: str):
        cls._logger.error(text)
