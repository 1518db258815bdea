"""
Logging utilities for Semantic Locator.

Resolution attempts are logged at DEBUG and exhausted chains at INFO, so
``--verbose`` on the CLI shows every strategy that was tried.
"""

import json
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; locators full of quotes stay valid JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    return handler


def _file_handler(path: str, level: int, json_format: bool, log_format: str) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(log_format))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> None:
    """
    Configure logging for the application.

    Replaces any handlers on the root logger with a Rich console handler
    and, when ``log_file`` is given, a file handler.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: Optional path to log file
        json_format: Write the log file as JSON lines
        log_format: Format string for a plain-text log file
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(log_level))

    if log_file:
        root_logger.addHandler(_file_handler(log_file, log_level, json_format, log_format))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (usually ``__name__``)."""
    return logging.getLogger(name)
