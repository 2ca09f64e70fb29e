"""Logging configuration for the Keywords AI node.

Console output is colored with colorlog, file output rotates, and the file
handler can switch to JSON structured records via python-json-logger.
Every handler carries a filter that masks bearer tokens so an API key never
reaches a log sink.
"""

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog
from pythonjsonlogger import json

_ENV_PREFIX = "KEYWORDSAI_"
_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE)


class BearerTokenFilter(logging.Filter):
    """Replace bearer tokens in log messages with a fixed mask."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "bearer" in message.lower():
            record.msg = _BEARER_PATTERN.sub(r"\1***", message)
            record.args = None
        return True


def _env(name: str, default):
    return os.getenv(f"{_ENV_PREFIX}{name}", default)


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, default))
    except ValueError:
        return default


def _build_console_handler(level: int) -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s" + _TEXT_FORMAT,
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
    return handler


def _build_file_handler(
    path: Path, level: int, json_format: bool, max_bytes: int, backup_count: int
) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(json.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s", datefmt=_DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file_level: str = "DEBUG",
    log_dir: Path | str | None = None,
    log_file_name: str = "keywordsai_node.log",
    log_json_format: bool = False,
    log_max_bytes: int = 10485760,  # 10MB
    log_backup_count: int = 5,
    force: bool = False,
) -> None:
    """Configure console and rotating file logging.

    Args:
        log_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_level: File log level
        log_dir: Directory for log files (defaults to 'logs' in project root)
        log_file_name: Name of the log file
        log_json_format: Write JSON records to the log file
        log_max_bytes: Maximum size of log file before rotation
        log_backup_count: Number of rotated files to keep
        force: Reconfigure even if the root logger already has handlers

    Environment Variables:
        KEYWORDSAI_LOG_LEVEL, KEYWORDSAI_LOG_FILE_LEVEL, KEYWORDSAI_LOG_DIR,
        KEYWORDSAI_LOG_FILE_NAME, KEYWORDSAI_LOG_JSON_FORMAT,
        KEYWORDSAI_LOG_MAX_BYTES, KEYWORDSAI_LOG_BACKUP_COUNT
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return

    log_level = _env("LOG_LEVEL", log_level).upper()
    log_file_level = _env("LOG_FILE_LEVEL", log_file_level).upper()
    log_dir = _env("LOG_DIR", log_dir)
    log_file_name = _env("LOG_FILE_NAME", log_file_name)
    log_json_format = str(_env("LOG_JSON_FORMAT", log_json_format)).lower() in ("true", "1", "yes")
    log_max_bytes = _env_int("LOG_MAX_BYTES", log_max_bytes)
    log_backup_count = _env_int("LOG_BACKUP_COUNT", log_backup_count)

    log_dir = Path(log_dir) if log_dir is not None else Path(__file__).parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = log_dir / log_file_name

    if force:
        root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)  # handlers filter

    token_filter = BearerTokenFilter()
    handlers = [
        _build_console_handler(getattr(logging, log_level, logging.INFO)),
        _build_file_handler(
            log_file_path,
            getattr(logging, log_file_level, logging.DEBUG),
            log_json_format,
            log_max_bytes,
            log_backup_count,
        ),
    ]
    for handler in handlers:
        handler.addFilter(token_filter)
        root_logger.addHandler(handler)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: console={log_level}, file={log_file_level}, "
        f"file_path={log_file_path}, json_format={log_json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring logging first if nothing has yet.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    if not logging.getLogger().handlers:
        setup_logging()

    return logging.getLogger(name)
