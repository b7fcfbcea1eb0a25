"""Structured JSON logging module.

This module provides JSON-formatted logging for applications that embed
the mirror. Library modules only create module-level loggers; calling
``setup_logging`` is left to the application.
"""

import json
import logging
import sys
from typing import Any

from openimages_mirror.config import get_settings

EXTRA_FIELDS: tuple[str, ...] = ("label", "section", "image_id", "object_key", "count")
"""Optional record attributes copied into the JSON payload."""


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as JSON objects with standardized fields:
    - timestamp: ISO format timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - label, section, image_id, object_key, count: Optional extra fields
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str | None = None, logger_name: str | None = None) -> logging.Logger:
    """Setup JSON structured logging for the application.

    Configures a logger (the root logger by default) with:
    - JSON formatter
    - StreamHandler to stdout
    - Level from ``log_level``, or ``Settings.LOG_LEVEL`` when omitted
      (``OPENIMAGES_LOG_LEVEL`` in the environment)

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        logger_name: Logger to configure, e.g. "openimages_mirror" to leave
            the application's root logger alone (None = root logger)

    Returns:
        The configured logger
    """
    level = log_level or get_settings().LOG_LEVEL

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    target = logging.getLogger(logger_name)
    target.setLevel(getattr(logging, level.upper()))
    target.handlers.clear()
    target.addHandler(handler)
    if logger_name is not None:
        target.propagate = False

    return target
