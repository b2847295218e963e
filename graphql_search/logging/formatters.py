"""
Custom logging formatters for graphql_search.

This module provides structured JSON and compact single-line formats.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """JSON structured logging formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)


class CompactFormatter(logging.Formatter):
    """Compact logging formatter for high-volume logs."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname).1s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record compactly."""
        message = record.getMessage()
        if len(message) > 200:
            record.msg = message[:197] + "..."
            record.args = ()

        return super().format(record)
