"""
Tests for the fluent query builder.
"""

import pytest

from graphql_search import (
    FieldBuilder,
    InlineFragment,
    Operator,
    Query,
    QueryBuildError,
    QueryBuilder,
    SchemaItem,
)


class TestQueryBuilder:
    """Test QueryBuilder."""

    def test_builds_place_query(self, place_query):
        query = (
            QueryBuilder("place")
            .search("places")
            .equals("country", "Canada")
            .greater_than("population", "10000")
            .on("PlaceType")
            .add_fields("name", "population")
            .field("coordinates")
            .add_fields("latitude", "longitude")
            .build()
        )

        assert isinstance(query, Query)
        assert query == place_query
        assert query.term == place_query.term

    def test_simple_fields(self):
        query = (
            QueryBuilder("profile", resource="profile")
            .match("id", Operator.EQUALS, "abc")
            .add_fields("id", "name", "email")
            .build()
        )

        assert query.schema.items == (SchemaItem("id"), SchemaItem("name"), SchemaItem("email"))
        assert query.term.startswith("query profile {search( resource: PROFILE,")

    def test_less_than_and_token_operator(self):
        query = (
            QueryBuilder("cheap")
            .search("products")
            .less_than("price", "10")
            .match("stock", "GTE", "1")
            .add_fields("sku")
            .build()
        )

        assert [m.operator for m in query.search.matches] == [
            Operator.LESS_THAN,
            Operator.GREATER_THAN_OR_EQUALS,
        ]

    def test_end_returns_to_parent(self):
        builder = QueryBuilder("profile").search("profile").equals("id", "abc")
        nationality = builder.field("nationality")
        nationality.add_fields("name")

        assert nationality.end() is builder

        query = builder.add_fields("email").build()
        assert query.schema.items == (
            SchemaItem("nationality", [SchemaItem("name")]),
            SchemaItem("email"),
        )

    def test_nested_fragment_inside_field(self):
        query = (
            QueryBuilder("owners")
            .search("profile")
            .equals("id", "abc")
            .field("pets")
            .on("DogType")
            .add_fields("breed")
            .build()
        )

        assert query.schema.items == (
            SchemaItem("pets", [InlineFragment("DogType", [SchemaItem("breed")])]),
        )
        assert "pets {...on DogType {breed\n}}" in query.term

    def test_empty_selection(self):
        query = (
            QueryBuilder("flags")
            .search("profile")
            .equals("id", "abc")
            .field("settings")
            .empty()
            .build()
        )

        assert "settings {}" in query.term

    def test_build_name_override(self):
        query = QueryBuilder().search("profile").equals("id", "abc").add_fields("id").build("lookup")

        assert query.name == "lookup"

    def test_missing_name(self):
        with pytest.raises(QueryBuildError, match="name"):
            QueryBuilder().search("profile").equals("id", "abc").add_fields("id").build()

    def test_missing_resource(self):
        with pytest.raises(QueryBuildError, match="resource"):
            QueryBuilder("q").add_fields("id").build()

    def test_no_matches_fails_fast(self):
        with pytest.raises(QueryBuildError):
            QueryBuilder("q").search("profile").add_fields("id").build()

    def test_no_fields_fails_fast(self):
        with pytest.raises(QueryBuildError):
            QueryBuilder("q").search("profile").equals("id", "abc").build()


class TestFieldBuilder:
    """Test FieldBuilder."""

    def test_end_on_root_raises(self):
        with pytest.raises(ValueError):
            FieldBuilder("orphan").end()

    def test_leaf_and_nested_items(self):
        assert FieldBuilder("id").to_item() == SchemaItem("id")
        assert FieldBuilder("tags").empty().to_item() == SchemaItem("tags", [])

    def test_fragment_item(self):
        fragment = FieldBuilder("PlaceType", on_type=True).add_fields("name")

        assert fragment.to_item() == InlineFragment("PlaceType", [SchemaItem("name")])
