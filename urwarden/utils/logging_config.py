"""
Structured logging configuration for urwarden.

Log records go to stderr; stdout is reserved for JSON Lines results.
JSON-formatted logs are available for log aggregation services.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from urwarden.config import Settings


HUMAN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable formatter that appends structured context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = getattr(record, "extra_data", None)
        if extra:
            pairs = " ".join(f"{key}={value}" for key, value in extra.items())
            line = f"{line} | {pairs}"
        return line


class StructuredLogger:
    """
    Wrapper for structured logging with additional context.

    Usage:
        logger = StructuredLogger("urwarden.blocklist")
        logger.info("Loaded blocklist", domains=1200, lines=1350)
        logger.error("Reload failed", error=str(e), exc_info=True)
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, **kwargs):
        """Log with extra data."""
        if not self._logger.isEnabledFor(level):
            return
        extra_data = kwargs.pop("extra_data", None) or kwargs
        record = self._logger.makeRecord(
            name=self._logger.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
        if extra_data:
            record.extra_data = extra_data
        self._logger.handle(record)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        if exc_info:
            self._logger.error(message, exc_info=True, extra={"extra_data": kwargs})
        else:
            self._log(logging.ERROR, message, **kwargs)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
):
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting instead of the human-readable one
        log_file: Optional file path for file logging (always JSON)
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ContextFormatter(HUMAN_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Suppress noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)


def init_logging(settings: "Settings"):
    """Initialize logging from settings (DEBUG when verbose)."""
    setup_logging(
        level="DEBUG" if settings.verbose else "INFO",
        json_format=settings.log_json,
        log_file=settings.log_file or None,
    )
