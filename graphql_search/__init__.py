"""
Lightweight GraphQL search client built on AIOHTTP.

This package builds search queries from structured matches and field
selections, posts them to a GraphQL endpoint and unwraps the
``data.search.results`` envelope into a flat list of caller-defined objects.

Features:
- Immutable query models rendering the search query text
- Fluent QueryBuilder
- Generic envelope decoding through pydantic
- Async fetcher with a distinct exception for every failure kind
"""

from .builder import FieldBuilder, QueryBuilder
from .config import (
    APPLICATION_KEY_HEADER,
    ConfigLoader,
    FetcherConfig,
    LoggingConfig,
    LogLevel,
    SearchConfig,
    load_config,
)
from .convenience import fetch_search, fetch_search_response
from .exceptions import (
    DecodeError,
    ErrorHandler,
    FetchCancelledError,
    GraphQLSearchError,
    HttpStatusError,
    QueryBuildError,
    SerializationError,
    ServerReportedError,
    TransportError,
    TransportErrorKind,
)
from .fetcher import GraphQLFetcher
from .logging import setup_logging
from .models import (
    InlineFragment,
    Match,
    Operator,
    Query,
    Schema,
    SchemaItem,
    Search,
)
from .response import SearchResponse, decode_search_response

__version__ = "0.1.0"

__all__ = [
    # Models
    "Operator",
    "Match",
    "Search",
    "SchemaItem",
    "InlineFragment",
    "Schema",
    "Query",
    # Builders
    "QueryBuilder",
    "FieldBuilder",
    # Responses
    "SearchResponse",
    "decode_search_response",
    # Fetching
    "GraphQLFetcher",
    "fetch_search",
    "fetch_search_response",
    # Configuration
    "APPLICATION_KEY_HEADER",
    "FetcherConfig",
    "LoggingConfig",
    "LogLevel",
    "SearchConfig",
    "ConfigLoader",
    "load_config",
    "setup_logging",
    # Exceptions
    "GraphQLSearchError",
    "QueryBuildError",
    "SerializationError",
    "TransportError",
    "TransportErrorKind",
    "FetchCancelledError",
    "HttpStatusError",
    "DecodeError",
    "ServerReportedError",
    "ErrorHandler",
]
