"""Structured logging for the weather dashboard.

Records go to a rotating JSON file (one object per line, tagged with the
service name and version) and to a plain console stream. Context such as
the city, operation or ``event_type`` is attached with ``log_with_context``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from weather_dashboard import __version__

SERVICE_NAME = "weather-dashboard"
DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "weather_dashboard.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Third-party loggers held at WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {log_level!r}")
    return level


def _json_formatter() -> jsonlogger.JsonFormatter:
    return jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d",
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"service": SERVICE_NAME, "version": __version__},
        timestamp=True,
    )


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Configure the root logger for the dashboard process.

    Args:
        log_level: Console threshold (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            the JSON file always receives DEBUG and up
        log_dir: Directory for the rotating JSON log, ./logs by default

    Returns:
        The configured root logger

    Raises:
        ValueError: If ``log_level`` is not a logging level name
    """
    level = _level(log_level)
    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    json_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    json_handler.setFormatter(_json_formatter())
    json_handler.setLevel(logging.DEBUG)
    root_logger.addHandler(json_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with extra fields that end up as top-level JSON keys.

    Args:
        logger: Logger instance
        level: Log level name (debug, info, warning, error, critical)
        message: Log message
        **extra_fields: Context such as ``city``, ``operation`` or ``event_type``
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
