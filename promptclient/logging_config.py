"""Logging configuration for promptclient.

Console output goes to stderr through colorlog so that warnings (unexpected
finish reasons) and parse diagnostics land on the error stream. A rotating
file handler is added only when a log directory is configured, optionally
emitting JSON records via python-json-logger.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog
from pythonjsonlogger import json

_CONSOLE_FORMAT = "%(log_color)s%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def setup_logging(
    log_level: str = "WARNING",
    log_file_level: str = "DEBUG",
    log_dir: Path | str | None = None,
    log_file_name: str = "promptclient.log",
    log_json_format: bool = False,
    log_max_bytes: int = 10485760,  # 10MB
    log_backup_count: int = 5,
    force: bool = False,
) -> None:
    """Configure logging for promptclient.

    Sets up:
    - Colored stderr handler (WARNING level by default)
    - Rotating file handler when log_dir is given (DEBUG level by default)
    - Optional JSON formatter for the file handler

    Args:
        log_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_level: File log level
        log_dir: Directory for log files; None disables file logging
        log_file_name: Name of the log file
        log_json_format: Write file records as JSON
        log_max_bytes: Maximum size of log file before rotation (default: 10MB)
        log_backup_count: Number of rotated files to keep (default: 5)
        force: Reconfigure even if the root logger already has handlers

    Environment Variables:
        PROMPTCLIENT_LOG_LEVEL, PROMPTCLIENT_LOG_FILE_LEVEL, PROMPTCLIENT_LOG_DIR,
        PROMPTCLIENT_LOG_FILE_NAME, PROMPTCLIENT_LOG_JSON_FORMAT,
        PROMPTCLIENT_LOG_MAX_BYTES, PROMPTCLIENT_LOG_BACKUP_COUNT
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return

    log_level = os.getenv("PROMPTCLIENT_LOG_LEVEL", log_level).upper()
    log_file_level = os.getenv("PROMPTCLIENT_LOG_FILE_LEVEL", log_file_level).upper()
    log_dir = os.getenv("PROMPTCLIENT_LOG_DIR", log_dir)
    log_file_name = os.getenv("PROMPTCLIENT_LOG_FILE_NAME", log_file_name)
    log_json_format = _env_flag("PROMPTCLIENT_LOG_JSON_FORMAT", log_json_format)
    log_max_bytes = _env_int("PROMPTCLIENT_LOG_MAX_BYTES", log_max_bytes)
    log_backup_count = _env_int("PROMPTCLIENT_LOG_BACKUP_COUNT", log_backup_count)

    numeric_level = getattr(logging, log_level, logging.WARNING)
    numeric_file_level = getattr(logging, log_file_level, logging.DEBUG)

    root_logger.setLevel(logging.DEBUG)  # handlers filter
    if force:
        root_logger.handlers.clear()

    console_handler = colorlog.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        colorlog.ColoredFormatter(
            _CONSOLE_FORMAT,
            datefmt=_DATE_FORMAT,
            reset=True,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
            style="%",
        )
    )
    root_logger.addHandler(console_handler)

    log_file_path = None
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = log_dir / log_file_name

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=log_max_bytes,
            backupCount=log_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_file_level)
        if log_json_format:
            file_handler.setFormatter(
                json.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s", datefmt=_DATE_FORMAT)
            )
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(
        f"Logging configured: console={log_level}, file={log_file_level if log_file_path else None}, "
        f"file_path={log_file_path}, json_format={log_json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring logging first if nothing else has.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        setup_logging()

    return logging.getLogger(name)
