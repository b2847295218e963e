"""
Search fetcher implementation.

This module sends a Query to a GraphQL endpoint over HTTP and turns the
answer into decoded search results, or exactly one GraphQLSearchError.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp

from .config.models import APPLICATION_KEY_HEADER, FetcherConfig
from .exceptions import (
    DecodeError,
    ErrorHandler,
    FetchCancelledError,
    HttpStatusError,
)
from .models import Query
from .response import ResultType, SearchResponse, decode_search_response, element_decoder

logger = logging.getLogger(__name__)


class GraphQLFetcher:
    """
    Sends search queries to one GraphQL endpoint.

    Each fetch is a single POST with no retry. The only state shared between
    concurrent fetches is the HTTP session and the configuration.

    Examples:
        ```python
        config = FetcherConfig(endpoint="https://api.example.com/graphql")

        async with GraphQLFetcher(config) as fetcher:
            fetcher.application_key = "my-key"
            places = await fetcher.fetch(place_query("Canada", 10000), Place)
        ```

        Keeping the count:
        ```python
        response = await fetcher.fetch_response(query, Place)
        print(response.count, len(response.results))
        ```
    """

    def __init__(
        self,
        config: FetcherConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            config: Endpoint, application key, timeout and extra headers
            session: Existing aiohttp session to use; it is not closed by the
                fetcher
        """
        self.config = config
        self._session = session
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return self.config.endpoint_url

    @property
    def application_key(self) -> Optional[str]:
        return self.config.application_key

    @application_key.setter
    def application_key(self, value: Optional[str]) -> None:
        self.config.application_key = value

    async def __aenter__(self) -> "GraphQLFetcher":
        self._get_session()
        return self

    async def __aexit__(
        self,
        _exc_type: Optional[type[BaseException]],
        _exc_val: Optional[BaseException],
        _exc_tb: Optional[Any],
    ) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if not self._owns_session:
                raise RuntimeError("The session passed to GraphQLFetcher is closed")
            self._session = aiohttp.ClientSession(raise_for_status=False)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if the fetcher created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def build_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        headers = dict(self.config.headers)
        headers["Content-Type"] = "application/json"
        if self.config.application_key:
            headers[APPLICATION_KEY_HEADER] = self.config.application_key
        return headers

    async def fetch(self, query: Query, result_type: Optional[ResultType] = None) -> List[Any]:
        """
        Run a search and return the decoded results.

        Args:
            query: Search query to send
            result_type: Element type of the results (pydantic model,
                dataclass, TypedDict, ... or a callable); None keeps raw JSON

        Returns:
            List of decoded results

        Raises:
            SerializationError: If the query cannot be serialized; nothing is sent
            TypeError: If result_type cannot be used as a decoder; nothing is sent
            TransportError: If no HTTP response was received
            HttpStatusError: If the status is not 200
            ServerReportedError: If the response carries GraphQL errors
            DecodeError: If the body does not match the search envelope
        """
        response = await self.fetch_response(query, result_type)
        return response.results

    async def fetch_response(
        self, query: Query, result_type: Optional[ResultType] = None
    ) -> SearchResponse[Any]:
        """
        Run a search and return the unwrapped envelope, including ``count``.

        Raises the same errors as fetch().
        """
        body = query.to_request_body()
        decode = element_decoder(result_type)
        headers = self.build_headers()
        request_kwargs: Dict[str, Any] = {"data": body, "headers": headers}
        # Per request, so injected sessions use it too.
        if self.config.timeout is not None:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.config.timeout)
        url = self.endpoint
        session = self._get_session()

        logger.debug("Sending search %r to %s", query.name, url)
        start_time = time.monotonic()

        try:
            async with session.post(url, **request_kwargs) as response:
                status = response.status
                response_headers = dict(response.headers)
                raw = await response.read()
        except asyncio.CancelledError as e:
            logger.debug("Search %r to %s was cancelled", query.name, url)
            raise FetchCancelledError(f"Search {query.name!r} was cancelled", url=url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            error = ErrorHandler.handle_aiohttp_error(e, url)
            logger.warning("Search %r failed (%s): %s", query.name, error.kind.value, e)
            raise error from e

        response_time = time.monotonic() - start_time
        text = raw.decode("utf-8", errors="replace")
        logger.debug(
            "Search %r answered %d in %.3fs (%d bytes)",
            query.name,
            status,
            response_time,
            len(raw),
        )
        if self.config.log_response_bodies:
            logger.debug("Response body: %s", text[: self.config.max_logged_body_chars])

        if status != 200:
            logger.warning("Search %r to %s returned HTTP %d", query.name, url, status)
            raise HttpStatusError(
                f"Search {query.name!r} returned HTTP {status}",
                status_code=status,
                url=url,
                headers=response_headers,
                response_text=text,
            )

        if not raw.strip():
            raise DecodeError(f"Search {query.name!r} returned an empty body", url=url, path="$")

        try:
            return decode_search_response(raw, decode, url=url)
        except DecodeError as e:
            logger.warning("Search %r response could not be decoded at %s", query.name, e.path)
            raise
