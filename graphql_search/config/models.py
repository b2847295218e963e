"""
Configuration models for graphql_search.

This module defines the fetcher and logging configuration with validation
and defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

APPLICATION_KEY_HEADER = "X-Application-Key"
RESERVED_HEADERS = frozenset({"content-type", APPLICATION_KEY_HEADER.lower()})
_HTTP_URL = TypeAdapter(HttpUrl)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class FetcherConfig(BaseModel):
    """Configuration for GraphQLFetcher."""

    endpoint: str = Field(description="GraphQL endpoint URL, posted to exactly as given")
    application_key: Optional[str] = Field(
        default=None, description="Value sent in the X-Application-Key header"
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Total request timeout in seconds (None keeps the aiohttp default)",
    )
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
    log_response_bodies: bool = Field(
        default=True, description="Log raw response bodies at DEBUG level"
    )
    max_logged_body_chars: int = Field(
        default=2000, ge=0, description="Truncate logged response bodies to this length"
    )

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @field_validator("endpoint")
    @classmethod
    def check_endpoint(cls, v: str) -> str:
        v = v.strip()
        # Validated as a URL but kept verbatim; HttpUrl would add a trailing slash.
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as e:
            raise ValueError(f"Invalid endpoint URL {v!r}: {e.errors()[0]['msg']}") from e
        return v

    @field_validator("application_key")
    @classmethod
    def strip_application_key(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("headers")
    @classmethod
    def check_reserved_headers(cls, v: Dict[str, str]) -> Dict[str, str]:
        for name in v:
            if name.lower() in RESERVED_HEADERS:
                raise ValueError(f"Header {name!r} is set by the fetcher and cannot be overridden")
        return v

    @property
    def endpoint_url(self) -> str:
        return self.endpoint


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Level of the graphql_search logger")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    enable_structured: bool = Field(
        default=False, description="Emit JSON lines instead of plain text"
    )
    enable_compact: bool = Field(
        default=False, description="Use the compact single-line format (ignored when structured)"
    )
    mask_credentials: bool = Field(
        default=True, description="Mask application keys and tokens in log messages"
    )

    model_config = ConfigDict(extra="forbid")


class SearchConfig(BaseModel):
    """Top-level configuration as loaded from files and the environment."""

    fetcher: FetcherConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")
