"""
Exception hierarchy for graphql_search.

Every failure a search can run into is surfaced as a subclass of
GraphQLSearchError, so callers can catch the whole family at once or pick
out the exact kind they care about.
"""

from __future__ import annotations

import asyncio
import ssl
from enum import Enum
from typing import Any, Dict, List, Optional

import aiohttp


class GraphQLSearchError(Exception):
    """
    Base exception for all graphql_search operations.

    Attributes:
        message: Human-readable error message
        url: Endpoint that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class QueryBuildError(GraphQLSearchError, ValueError):
    """Raised when a match, search, schema or query is constructed from invalid input."""

    pass


class SerializationError(GraphQLSearchError):
    """Raised when a query cannot be turned into a JSON request body."""

    pass


class TransportErrorKind(str, Enum):
    """Categories of transport-level failure."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    TLS = "tls"
    NETWORK = "network"
    CANCELLED = "cancelled"


class TransportError(GraphQLSearchError):
    """
    Raised when the request never produced an HTTP response.

    Covers DNS failures, refused connections, timeouts, TLS problems and
    cancellation of the in-flight request.

    Attributes:
        kind: What went wrong at the transport layer
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        kind: TransportErrorKind = TransportErrorKind.NETWORK,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.kind = kind


class FetchCancelledError(TransportError, asyncio.CancelledError):
    """
    Raised when the caller cancels an in-flight fetch.

    It is both a TransportError (kind CANCELLED) and an
    asyncio.CancelledError, so task cancellation keeps propagating through
    asyncio as usual.
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message, url, kind=TransportErrorKind.CANCELLED)


class HttpStatusError(GraphQLSearchError):
    """Raised when the endpoint answers with anything other than HTTP 200."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.headers = headers or {}
        self.response_text = response_text

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600


class DecodeError(GraphQLSearchError):
    """
    Raised when a response body does not match the search envelope.

    Attributes:
        path: Location inside the body where decoding failed
            (e.g. ``data.search.results[3]``)
        index: Position of the failing result element, if an element failed
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        path: Optional[str] = None,
        index: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, url, **kwargs)
        self.path = path
        self.index = index


class ServerReportedError(GraphQLSearchError):
    """Raised when an HTTP 200 response carries a GraphQL ``errors`` array."""

    def __init__(
        self,
        message: str,
        errors: List[Dict[str, Any]],
        url: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> None:
        super().__init__(message, url)
        self.errors = errors
        self.data = data

    @property
    def messages(self) -> List[str]:
        """Get list of error messages."""
        return [
            str(error.get("message", "Unknown error")) if isinstance(error, dict) else str(error)
            for error in self.errors
        ]


class ErrorHandler:
    """Converts transport exceptions into TransportError instances."""

    @staticmethod
    def handle_aiohttp_error(
        error: BaseException, url: Optional[str] = None
    ) -> TransportError:
        """
        Convert aiohttp / asyncio exceptions to a TransportError.

        Args:
            error: The original exception
            url: The endpoint that caused the error

        Returns:
            TransportError with the matching kind
        """
        if isinstance(error, asyncio.CancelledError):
            return FetchCancelledError("Request was cancelled", url=url)

        elif isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
            return TransportError(
                f"Request timed out: {error}", url=url, kind=TransportErrorKind.TIMEOUT
            )

        elif isinstance(error, (aiohttp.ClientSSLError, ssl.SSLError)):
            return TransportError(
                f"SSL error: {error}", url=url, kind=TransportErrorKind.TLS
            )

        elif isinstance(error, aiohttp.ClientConnectionError):
            return TransportError(
                f"Connection error: {error}", url=url, kind=TransportErrorKind.CONNECTION
            )

        else:
            return TransportError(
                f"Unexpected network error: {error}",
                url=url,
                kind=TransportErrorKind.NETWORK,
            )
