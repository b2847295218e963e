"""
Search query builders.

This module provides a fluent interface for assembling a Query
programmatically instead of nesting Match, SchemaItem and InlineFragment
constructors by hand.
"""

from __future__ import annotations

from typing import List, Optional, Union

from .exceptions import QueryBuildError
from .models import (
    InlineFragment,
    Match,
    Operator,
    Query,
    Schema,
    SchemaItem,
    Search,
)


class FieldBuilder:
    """Builder for a selected field or an inline fragment."""

    def __init__(
        self,
        name: str,
        parent: Optional[Union["QueryBuilder", "FieldBuilder"]] = None,
        on_type: bool = False,
    ):
        """
        Initialize field builder.

        Args:
            name: Field name, or the type name when ``on_type`` is set
            parent: Parent builder (QueryBuilder or FieldBuilder)
            on_type: Build an inline fragment (``...on name``) instead of a field
        """
        self.name = name
        self.parent = parent
        self.on_type = on_type
        self.sub_fields: List[FieldBuilder] = []
        self._nested = on_type

    def field(self, name: str) -> FieldBuilder:
        """
        Add sub-field.

        Args:
            name: Sub-field name

        Returns:
            FieldBuilder for the sub-field
        """
        self._nested = True
        sub_field = FieldBuilder(name, parent=self)
        self.sub_fields.append(sub_field)
        return sub_field

    def add_fields(self, *names: str) -> FieldBuilder:
        """
        Add multiple leaf sub-fields.

        Args:
            *names: Field names

        Returns:
            Self for chaining
        """
        self._nested = True
        for name in names:
            self.sub_fields.append(FieldBuilder(name, parent=self))
        return self

    def on(self, type_name: str) -> FieldBuilder:
        """
        Add an inline fragment below this field.

        Args:
            type_name: Concrete type the fragment applies to

        Returns:
            FieldBuilder for the fragment
        """
        self._nested = True
        fragment = FieldBuilder(type_name, parent=self, on_type=True)
        self.sub_fields.append(fragment)
        return fragment

    def empty(self) -> FieldBuilder:
        """Render this field as ``name {}`` even without sub-fields."""
        self._nested = True
        return self

    def end(self) -> Union["QueryBuilder", "FieldBuilder"]:
        """
        Return to parent builder.

        Returns:
            Parent builder (QueryBuilder or FieldBuilder)
        """
        if self.parent is None:
            raise ValueError("Cannot call end() on root field builder")
        return self.parent

    def build(self, name: Optional[str] = None) -> Query:
        """Build the query owning this field."""
        node: Union[QueryBuilder, FieldBuilder] = self
        while isinstance(node, FieldBuilder):
            node = node.end()
        return node.build(name)

    def to_item(self) -> Union[SchemaItem, InlineFragment]:
        children = tuple(sub_field.to_item() for sub_field in self.sub_fields)
        if self.on_type:
            return InlineFragment(self.name, children)
        if not self._nested:
            return SchemaItem(self.name)
        return SchemaItem(self.name, children)


class QueryBuilder:
    """
    Fluent interface for building search queries.

    Examples:
        ```python
        query = (QueryBuilder("place")
            .search("places")
            .equals("country", "Canada")
            .greater_than("population", "10000")
            .on("PlaceType")
                .add_fields("name", "population")
                .field("coordinates")
                    .add_fields("latitude", "longitude")
            .build()
        )
        ```
    """

    def __init__(self, name: Optional[str] = None, resource: Optional[str] = None):
        """
        Initialize query builder.

        Args:
            name: Operation name
            resource: Resource to search
        """
        self.name = name
        self.resource = resource
        self.matches: List[Match] = []
        self.fields: List[FieldBuilder] = []

    def search(self, resource: str) -> QueryBuilder:
        """Set the resource to search."""
        self.resource = resource
        return self

    def match(
        self, attribute: str, operator: Union[Operator, str], value: str
    ) -> QueryBuilder:
        """
        Add a match; all matches must hold.

        Args:
            attribute: Attribute name
            operator: Operator or its wire token
            value: Value, already converted to a string

        Returns:
            Self for chaining
        """
        self.matches.append(Match(attribute, operator, value))
        return self

    def equals(self, attribute: str, value: str) -> QueryBuilder:
        return self.match(attribute, Operator.EQUALS, value)

    def greater_than(self, attribute: str, value: str) -> QueryBuilder:
        return self.match(attribute, Operator.GREATER_THAN, value)

    def less_than(self, attribute: str, value: str) -> QueryBuilder:
        return self.match(attribute, Operator.LESS_THAN, value)

    def field(self, name: str) -> FieldBuilder:
        """
        Add a top-level result field.

        Args:
            name: Field name

        Returns:
            FieldBuilder for the field
        """
        field_builder = FieldBuilder(name, parent=self)
        self.fields.append(field_builder)
        return field_builder

    def add_fields(self, *names: str) -> QueryBuilder:
        """
        Add multiple top-level leaf fields.

        Args:
            *names: Field names

        Returns:
            Self for chaining
        """
        for name in names:
            self.fields.append(FieldBuilder(name, parent=self))
        return self

    def on(self, type_name: str) -> FieldBuilder:
        """
        Add a top-level inline fragment.

        Args:
            type_name: Concrete result type

        Returns:
            FieldBuilder for the fragment
        """
        fragment = FieldBuilder(type_name, parent=self, on_type=True)
        self.fields.append(fragment)
        return fragment

    def build(self, name: Optional[str] = None) -> Query:
        """
        Build the query.

        Args:
            name: Operation name, overriding the one given to the constructor

        Returns:
            Query object

        Raises:
            QueryBuildError: If the name or resource is missing, or the query
                has no matches or no fields
        """
        name = name or self.name
        if not name:
            raise QueryBuildError("Query name is required")
        if not self.resource:
            raise QueryBuildError("Search resource is required")

        return Query(
            name=name,
            search=Search(self.resource, tuple(self.matches)),
            schema=Schema(tuple(field.to_item() for field in self.fields)),
        )
