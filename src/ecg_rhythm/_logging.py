"""Logging configuration for the ecg_rhythm package.

The package logs through a single logger named after the package. It writes to
stdout at INFO level by default, using a ``name | level | message`` format.
Hosts that embed the analysis can change the console verbosity with
:func:`set_log_level` and mirror records into a rotating file, at a level of
its own, with :func:`set_log_file`.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(name)s | %(levelname)s | %(message)s"
LOG_FILE_MAX_BYTES = 10_000_000
LOG_FILE_BACKUPS = 3

logger = logging.getLogger(__package__)


def _to_numeric(log_level: LogLevel | int) -> int:
    if isinstance(log_level, int):
        return log_level
    levels = logging.getLevelNamesMapping()
    name = log_level.upper()
    if name not in levels:
        raise ValueError(f"Unknown log level '{log_level}'. Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
    return levels[name]


def _console_handlers() -> list[logging.Handler]:
    return [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]


def _file_handlers() -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def _sync_logger_level() -> None:
    """Let the logger pass everything that at least one handler accepts."""
    if logger.handlers:
        logger.setLevel(min(h.level for h in logger.handlers))


if not logger.handlers:
    _console = logging.StreamHandler(sys.stdout)
    _console.setFormatter(logging.Formatter(LOG_FORMAT))
    _console.setLevel(logging.INFO)
    logger.addHandler(_console)
    logger.propagate = False
    _sync_logger_level()


def set_log_level(log_level: LogLevel | int) -> None:
    """Set the level of the console output.

    A file handler added with :func:`set_log_file` keeps its own level.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number

    Raises:
        ValueError: If the level name is unknown

    Example:
        >>> set_log_level("WARNING")
        >>> logger.info("Detected 10 beats")  # suppressed
    """
    numeric_level = _to_numeric(log_level)
    for handler in _console_handlers():
        handler.setLevel(numeric_level)
    _sync_logger_level()


def set_log_file(log_file: str | Path | None, log_level: LogLevel | int = "DEBUG") -> RotatingFileHandler | None:
    """Mirror package log records into a rotating file.

    A file handler added by an earlier call is closed and replaced. Passing
    None only removes it.

    Args:
        log_file: Path to the log file, parent directories are created
        log_level: Level for the file handler

    Returns:
        The new file handler, or None if logging to a file was switched off

    Example:
        >>> set_log_file("logs/analysis.log", log_level="INFO")
    """
    for handler in _file_handlers():
        handler.close()
        logger.removeHandler(handler)

    file_handler = None
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(_to_numeric(log_level))
        logger.addHandler(file_handler)

    _sync_logger_level()
    return file_handler
