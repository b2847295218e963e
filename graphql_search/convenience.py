"""
Convenience functions for one-off searches.

These wrap GraphQLFetcher for callers that do not want to manage a fetcher
or session themselves.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .config.models import FetcherConfig
from .fetcher import GraphQLFetcher
from .models import Query
from .response import ResultType, SearchResponse


async def fetch_search(
    endpoint: str,
    query: Query,
    result_type: Optional[ResultType] = None,
    application_key: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[Any]:
    """
    Run one search against ``endpoint`` and return the decoded results.

    A fresh HTTP session is opened and closed around the request.

    Args:
        endpoint: GraphQL endpoint URL
        query: Search query to send
        result_type: Element type of the results
        application_key: Optional X-Application-Key header value
        timeout: Optional total timeout in seconds

    Returns:
        List of decoded results

    Example:
        ```python
        places = await fetch_search(
            "https://api.example.com/graphql",
            place_query("Canada", 10000),
            Place,
        )
        ```
    """
    response = await fetch_search_response(
        endpoint, query, result_type, application_key=application_key, timeout=timeout
    )
    return response.results


async def fetch_search_response(
    endpoint: str,
    query: Query,
    result_type: Optional[ResultType] = None,
    application_key: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SearchResponse[Any]:
    """Like fetch_search, but return the whole envelope including ``count``."""
    config = FetcherConfig(
        endpoint=endpoint, application_key=application_key, timeout=timeout
    )
    async with GraphQLFetcher(config) as fetcher:
        return await fetcher.fetch_response(query, result_type)
