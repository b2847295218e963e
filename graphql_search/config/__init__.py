"""
Configuration management for graphql_search.

This module provides the fetcher and logging configuration models and a
loader that reads them from files and environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import (
    APPLICATION_KEY_HEADER,
    FetcherConfig,
    LoggingConfig,
    LogLevel,
    SearchConfig,
)

__all__ = [
    "APPLICATION_KEY_HEADER",
    "ConfigLoader",
    "FetcherConfig",
    "LoggingConfig",
    "LogLevel",
    "SearchConfig",
    "load_config",
]
