"""
Search query models.

This module defines the immutable building blocks of a search query
(matches, the search call, the field selection) and renders them to the
GraphQL text understood by search endpoints:

    query NAME {search( resource: RESOURCE, query: { must:[MATCH,...]} ){count
     results {
    FIELD...}}}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from .exceptions import QueryBuildError, SerializationError


class Operator(str, Enum):
    """Comparison operators; each value is the token sent on the wire."""

    EQUALS = "EQ"
    NOT_EQUALS = "NE"
    GREATER_THAN = "GT"
    GREATER_THAN_OR_EQUALS = "GTE"
    LESS_THAN = "LT"
    LESS_THAN_OR_EQUALS = "LTE"

    @property
    def token(self) -> str:
        return self.value


def quote(value: str) -> str:
    """Render a Python string as a GraphQL string literal."""
    # JSON string escapes are a subset of GraphQL's; plain text is unchanged.
    return json.dumps(value, ensure_ascii=False)


def _coerce_operator(op: Union[Operator, str]) -> Operator:
    if isinstance(op, Operator):
        return op
    try:
        return Operator(op)
    except ValueError:
        try:
            return Operator[str(op).upper()]
        except KeyError:
            raise QueryBuildError(f"Unknown operator: {op!r}") from None


@dataclass(frozen=True)
class Match:
    """One filter condition, e.g. ``country EQ "Canada"``."""

    attribute: str
    operator: Operator
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.attribute, str) or not self.attribute:
            raise QueryBuildError("Match attribute must be a non-empty string")
        if not isinstance(self.value, str):
            raise QueryBuildError(
                f"Match value for {self.attribute!r} must be a string, "
                f"got {type(self.value).__name__}"
            )
        object.__setattr__(self, "operator", _coerce_operator(self.operator))

    @property
    def term(self) -> str:
        return (
            f"{{match: {{operator: {self.operator.token}, "
            f"attr: {quote(self.attribute)}, value: {quote(self.value)}}}}}"
        )


@dataclass(frozen=True)
class Search:
    """A resource to search plus the matches that must all hold."""

    resource: str
    matches: Tuple[Match, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.resource, str) or not self.resource.strip():
            raise QueryBuildError("Search resource must be a non-empty string")
        matches = tuple(self.matches)
        for match in matches:
            if not isinstance(match, Match):
                raise QueryBuildError(
                    f"Search matches must be Match instances, got {type(match).__name__}"
                )
        object.__setattr__(self, "matches", matches)

    @property
    def term(self) -> str:
        must = ",".join(match.term for match in self.matches)
        return f"search( resource: {self.resource.upper()}, query: {{ must:[{must}]}} )"


SelectionInput = Union["SchemaItem", "InlineFragment", str]


def _selections(items: Optional[Sequence[SelectionInput]]) -> Tuple[Any, ...]:
    if isinstance(items, (str, SchemaItem, InlineFragment)):
        raise QueryBuildError("Selections must be given as a sequence")
    result = []
    for item in items or ():
        if isinstance(item, str):
            item = SchemaItem(item)
        elif not isinstance(item, (SchemaItem, InlineFragment)):
            raise QueryBuildError(
                f"Selections must be SchemaItem, InlineFragment or str, "
                f"got {type(item).__name__}"
            )
        result.append(item)
    return tuple(result)


@dataclass(frozen=True)
class SchemaItem:
    """
    A selected field.

    A leaf (``children is None``) renders as the bare field name; a field with
    children (even an empty sequence) renders as a nested selection set.
    """

    name: str
    children: Optional[Tuple[Union["SchemaItem", "InlineFragment"], ...]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise QueryBuildError("Schema item name must be a non-empty string")
        if self.children is not None:
            object.__setattr__(self, "children", _selections(self.children))

    @classmethod
    def leaf(cls, name: str) -> SchemaItem:
        return cls(name)

    @classmethod
    def nested(cls, name: str, *children: SelectionInput) -> SchemaItem:
        return cls(name, _selections(children))

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def term(self) -> str:
        if self.children is None:
            return self.name + "\n"
        return f"{self.name} {{" + "".join(child.term for child in self.children) + "}"


@dataclass(frozen=True)
class InlineFragment:
    """Fields selected only when the result is of ``type_name``."""

    type_name: str
    children: Tuple[Union[SchemaItem, "InlineFragment"], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.type_name, str) or not self.type_name.strip():
            raise QueryBuildError("Inline fragment type name must be a non-empty string")
        object.__setattr__(self, "children", _selections(self.children))

    @property
    def name(self) -> str:
        return f"...on {self.type_name}"

    @property
    def term(self) -> str:
        return f"{self.name} {{" + "".join(child.term for child in self.children) + "}"


@dataclass(frozen=True)
class Schema:
    """Top-level selection, always wrapped in ``count`` and ``results { ... }``."""

    items: Tuple[Union[SchemaItem, InlineFragment], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _selections(self.items))

    @property
    def term(self) -> str:
        return "{count\n results {\n" + "".join(item.term for item in self.items) + "}}"


@dataclass(frozen=True)
class Query:
    """A named search query: one Search plus one Schema."""

    name: str
    search: Search
    schema: Schema

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise QueryBuildError("Query name must be a non-empty string")
        if not self.search.matches:
            raise QueryBuildError(
                f"Query {self.name!r} has no matches; a search needs at least one"
            )
        if not self.schema.items:
            raise QueryBuildError(
                f"Query {self.name!r} selects no fields; a schema needs at least one item"
            )

    @property
    def term(self) -> str:
        return f"query {self.name} {{{self.search.term}{self.schema.term}}}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        # Some servers answer 500 when "variables" is missing rather than null.
        return {"query": self.term, "variables": None}

    def to_request_body(self) -> bytes:
        """
        Serialize the query to a UTF-8 JSON request body.

        Raises:
            SerializationError: If the rendered query cannot be encoded
        """
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Could not serialize query {self.name!r}: {e}", query_name=self.name
            ) from e
