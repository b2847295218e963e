"""
Shared test fixtures and configuration for the graphql_search test suite.
"""

from typing import Any, Dict, Generator, Optional

import pytest
from aioresponses import aioresponses
from pydantic import BaseModel

from graphql_search import (
    FetcherConfig,
    InlineFragment,
    Match,
    Operator,
    Query,
    Schema,
    SchemaItem,
    Search,
)

ENDPOINT = "https://api.example.com/graphql"


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class Place(BaseModel):
    name: str
    population: Optional[int] = None
    coordinates: Optional[Coordinates] = None


def envelope(results: list, count: Optional[int] = None) -> Dict[str, Any]:
    """Wrap results the way a search endpoint does."""
    return {
        "data": {
            "search": {
                "count": len(results) if count is None else count,
                "results": results,
            }
        }
    }


@pytest.fixture
def endpoint() -> str:
    return ENDPOINT


@pytest.fixture
def fetcher_config() -> FetcherConfig:
    """Default test configuration for GraphQLFetcher."""
    return FetcherConfig(endpoint=ENDPOINT, timeout=5.0)


@pytest.fixture
def place_query() -> Query:
    """Places in Canada with more than 10000 people."""
    return Query(
        "place",
        Search(
            "places",
            [
                Match("country", Operator.EQUALS, "Canada"),
                Match("population", Operator.GREATER_THAN, "10000"),
            ],
        ),
        Schema(
            [
                InlineFragment(
                    "PlaceType",
                    [
                        SchemaItem("name"),
                        SchemaItem("population"),
                        SchemaItem("coordinates", [SchemaItem("latitude"), SchemaItem("longitude")]),
                    ],
                )
            ]
        ),
    )


@pytest.fixture
def mock_aiohttp() -> Generator[aioresponses, None, None]:
    """Mock aiohttp responses for testing."""
    with aioresponses() as m:
        yield m


@pytest.fixture
def make_envelope():
    return envelope


@pytest.fixture
def place_model():
    return Place
