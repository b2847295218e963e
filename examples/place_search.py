#!/usr/bin/env python3
"""
Basic usage examples for the graphql_search library.

Builds the same ``place`` query twice (once from the models, once with the
fluent builder), prints the generated GraphQL text, and runs it against the
endpoint given in GRAPHQL_SEARCH_ENDPOINT if one is set.
"""

import asyncio
import os
from typing import Optional

from pydantic import BaseModel

from graphql_search import (
    FetcherConfig,
    GraphQLFetcher,
    GraphQLSearchError,
    InlineFragment,
    Match,
    Operator,
    Query,
    QueryBuilder,
    Schema,
    SchemaItem,
    Search,
)


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class Place(BaseModel):
    name: str
    population: int
    coordinates: Optional[Coordinates] = None


def place_query(country: str, minimum_population: int) -> Query:
    """Places in ``country`` with more than ``minimum_population`` people."""
    search = Search(
        "places",
        [
            Match("country", Operator.EQUALS, country),
            # everything is sent as a string
            Match("population", Operator.GREATER_THAN, str(minimum_population)),
        ],
    )
    schema = Schema(
        [
            InlineFragment(
                "PlaceType",
                [
                    SchemaItem("name"),
                    SchemaItem("population"),
                    SchemaItem.nested("coordinates", "latitude", "longitude"),
                ],
            )
        ]
    )
    return Query("place", search, schema)


def place_query_with_builder(country: str, minimum_population: int) -> Query:
    return (
        QueryBuilder("place")
        .search("places")
        .equals("country", country)
        .greater_than("population", str(minimum_population))
        .on("PlaceType")
        .add_fields("name", "population")
        .field("coordinates")
        .add_fields("latitude", "longitude")
        .build()
    )


async def main() -> None:
    query = place_query("Canada", 10000)
    assert query == place_query_with_builder("Canada", 10000)

    print("=== Generated query ===\n")
    print(query.term)
    print()

    endpoint = os.getenv("GRAPHQL_SEARCH_ENDPOINT")
    if not endpoint:
        print("Set GRAPHQL_SEARCH_ENDPOINT to run the query.")
        return

    config = FetcherConfig(
        endpoint=endpoint,
        application_key=os.getenv("GRAPHQL_SEARCH_APPLICATION_KEY"),
    )
    async with GraphQLFetcher(config) as fetcher:
        try:
            response = await fetcher.fetch_response(query, Place)
        except GraphQLSearchError as e:
            print(f"Search failed: {type(e).__name__}: {e}")
            return

    print(f"=== {response.count} places ===\n")
    for place in response.results:
        print(f"{place.name}: {place.population}")


if __name__ == "__main__":
    asyncio.run(main())
