"""
Search response decoding.

Search endpoints wrap every answer in the same envelope:

    {"data": {"search": {"count": 2, "results": [{...}, {...}]}}}

This module unwraps it into a SearchResponse holding the count and the
results decoded to a caller-chosen element type. The envelope code never
looks inside an element; element decoding is delegated to pydantic's
TypeAdapter, or to a plain callable supplied by the caller.
"""

from __future__ import annotations

import json
import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from pydantic import TypeAdapter
from pydantic.errors import PydanticSchemaGenerationError

from .exceptions import DecodeError, ServerReportedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ResultType = Union[type, Callable[[Any], Any], Any]


@dataclass
class SearchResponse(Generic[T]):
    """Unwrapped search envelope."""

    count: int
    results: List[T] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)


def element_decoder(result_type: Optional[ResultType]) -> Callable[[Any], Any]:
    """
    Return a function decoding one raw result element.

    Args:
        result_type: A type pydantic can validate (BaseModel, dataclass,
            TypedDict, ``dict``, ``List[int]`` ...), a plain callable taking the
            raw element, or None to keep elements as parsed JSON. A class
            pydantic has no schema for is called with the raw element.

    Returns:
        Callable taking one raw element
    """
    if result_type is None or result_type is Any:
        return lambda raw: raw
    if isinstance(result_type, type) or typing.get_origin(result_type) is not None:
        try:
            return TypeAdapter(result_type).validate_python
        except PydanticSchemaGenerationError as e:
            if not isinstance(result_type, type):
                raise TypeError(f"Cannot decode search results as {result_type!r}") from e
    if callable(result_type):
        return result_type
    raise TypeError(f"Cannot decode search results as {result_type!r}")


def _load_payload(body: Union[bytes, str, Mapping[str, Any]], url: Optional[str]) -> Any:
    if isinstance(body, Mapping):
        return body
    try:
        return json.loads(body)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}", url=url, path="$") from e


def _require(
    container: Any, key: str, path: str, expected: type, url: Optional[str]
) -> Any:
    if not isinstance(container, Mapping) or key not in container:
        raise DecodeError(f"Missing '{path}' in search response", url=url, path=path)
    value = container[key]
    if expected is int and isinstance(value, bool):
        value_ok = False
    else:
        value_ok = isinstance(value, expected)
    if not value_ok:
        raise DecodeError(
            f"Expected '{path}' to be {expected.__name__}, got {type(value).__name__}",
            url=url,
            path=path,
        )
    return value


def check_server_errors(payload: Any, url: Optional[str] = None) -> None:
    """
    Raise ServerReportedError if a GraphQL ``errors`` array is present.

    Partial ``data`` sent alongside the errors is attached to the exception.
    """
    if not isinstance(payload, Mapping):
        return
    errors = payload.get("errors")
    if not errors:
        return
    if not isinstance(errors, list):
        errors = [errors]
    error_list: List[Dict[str, Any]] = []
    for e in errors:
        if not isinstance(e, dict):
            e = {"message": str(e)}
        elif "message" in e and not isinstance(e["message"], str):
            e = {**e, "message": str(e["message"])}
        error_list.append(e)
    messages = "; ".join(str(e.get("message", "Unknown error")) for e in error_list)
    raise ServerReportedError(
        f"Server reported errors: {messages}",
        errors=error_list,
        url=url,
        data=payload.get("data"),
    )


def decode_search_response(
    body: Union[bytes, str, Mapping[str, Any]],
    result_type: Optional[ResultType] = None,
    url: Optional[str] = None,
) -> SearchResponse[Any]:
    """
    Decode a search envelope.

    Args:
        body: Raw response body or an already parsed JSON object
        result_type: Element type of ``data.search.results`` (see element_decoder)
        url: Endpoint the body came from, for error context

    Returns:
        SearchResponse with ``count`` and the decoded results

    Raises:
        ServerReportedError: If the body carries a GraphQL ``errors`` array
        DecodeError: If any envelope level is missing or mistyped, or an
            element fails to decode
    """
    decode = element_decoder(result_type)
    payload = _load_payload(body, url)

    check_server_errors(payload, url)

    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}", url=url, path="$"
        )

    data = _require(payload, "data", "data", dict, url)
    search = _require(data, "search", "data.search", dict, url)
    count = _require(search, "count", "data.search.count", int, url)
    raw_results = _require(search, "results", "data.search.results", list, url)

    results = []
    for index, raw in enumerate(raw_results):
        try:
            results.append(decode(raw))
        except Exception as e:
            path = f"data.search.results[{index}]"
            logger.warning("Search result %d could not be decoded: %s", index, e)
            raise DecodeError(
                f"Could not decode {path}: {e}", url=url, path=path, index=index
            ) from e

    return SearchResponse(count=count, results=results)
