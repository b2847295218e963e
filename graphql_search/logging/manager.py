"""
Logging manager for graphql_search.

The library itself only ever logs through ``logging.getLogger(__name__)``
and ships a NullHandler, so nothing is printed unless an application opts in.
This module is that opt-in: it attaches a handler to the ``graphql_search``
logger according to a LoggingConfig.
"""

import logging
import sys
from typing import IO, Dict, Iterable, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import SensitiveDataFilter
from .formatters import CompactFormatter, StructuredFormatter

PACKAGE_LOGGER = "graphql_search"


class LoggingManager:
    """Configures handlers on the package logger."""

    def __init__(self, logger_name: str = PACKAGE_LOGGER) -> None:
        self.logger_name = logger_name
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    def setup_logging(
        self,
        config: LoggingConfig,
        stream: Optional[IO[str]] = None,
        secrets: Optional[Iterable[str]] = None,
    ) -> logging.Handler:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
            stream: Stream for the console handler (defaults to stderr)
            secrets: Literal values to mask, such as the application key

        Returns:
            The installed console handler
        """
        if self._configured:
            self.cleanup()

        logger = self.logger
        logger.setLevel(getattr(logging, LogLevel(config.level).value))

        handler = logging.StreamHandler(stream or sys.stderr)
        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        elif config.enable_compact:
            formatter = CompactFormatter()
        else:
            formatter = logging.Formatter(config.format)
        handler.setFormatter(formatter)

        if config.mask_credentials:
            handler.addFilter(SensitiveDataFilter(secrets))

        logger.addHandler(handler)
        self._handlers["console"] = handler
        self._configured = True

        logger.debug("Logging configured at level %s", LogLevel(config.level).value)
        return handler

    def set_level(self, level: LogLevel) -> None:
        self.logger.setLevel(getattr(logging, LogLevel(level).value))

    def cleanup(self) -> None:
        """Remove and close the handlers installed by this manager."""
        logger = self.logger
        for handler in list(self._handlers.values()):
            logger.removeHandler(handler)
            handler.close()
        if self._configured:
            logger.setLevel(logging.NOTSET)

        self._handlers.clear()
        self._configured = False

    def is_configured(self) -> bool:
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(
    config: Optional[LoggingConfig] = None,
    stream: Optional[IO[str]] = None,
    secrets: Optional[Iterable[str]] = None,
) -> logging.Handler:
    """
    Setup logging with configuration.

    Args:
        config: Logging configuration (defaults to LoggingConfig())
        stream: Stream for the console handler
        secrets: Literal values to mask in log output
    """
    return _logging_manager.setup_logging(config or LoggingConfig(), stream, secrets)


def cleanup_logging() -> None:
    """Remove handlers installed by setup_logging."""
    _logging_manager.cleanup()
