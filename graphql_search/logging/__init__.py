"""
Logging support for graphql_search.

This module provides credential masking, structured formatters and an
opt-in setup function for applications that want the library's log output.
"""

import logging

from .filters import SensitiveDataFilter
from .formatters import CompactFormatter, StructuredFormatter
from .manager import PACKAGE_LOGGER, LoggingManager, cleanup_logging, setup_logging

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

__all__ = [
    "LoggingManager",
    "setup_logging",
    "cleanup_logging",
    "StructuredFormatter",
    "CompactFormatter",
    "SensitiveDataFilter",
]
