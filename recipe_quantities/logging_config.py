"""Logging configuration for recipe_quantities."""

import logging
import sys
from datetime import datetime, timezone

from .config import get_log_level

PACKAGE_LOGGER = "recipe_quantities"


class ReadableFormatter(logging.Formatter):
    """Human-readable single-line formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        formatted = f"{timestamp} | {level} | {record.name} | {record.getMessage()}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)


def configure_logging(log_level: str | None = None) -> None:
    """
    Configure logging for the package.

    Installs one stderr handler on the package logger, replacing the one
    from any earlier call.

    Args:
        log_level: Minimum log level name. Defaults to RECIPE_LOG_LEVEL.
    """
    level_str = (log_level or get_log_level()).upper()
    level = getattr(logging, level_str, logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    # Remove handlers from earlier calls
    for handler in package_logger.handlers[:]:
        if isinstance(handler.formatter, ReadableFormatter):
            package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ReadableFormatter())
    console_handler.setLevel(level)
    package_logger.addHandler(console_handler)

    # HTTP client libraries are noisy at DEBUG
    for module_name in ("httpx", "httpcore"):
        logging.getLogger(module_name).setLevel(logging.WARNING)

    get_logger(__name__).debug(f"Logging configured: level={level_str}")
