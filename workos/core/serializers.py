"""Wire ↔ domain helpers shared by list endpoints and event models."""
from __future__ import annotations
import re
from typing import Any, Callable, Dict, TypeVar

from .pagination import ListMetadata, WorkOSList

T = TypeVar("T")

_SNAKE_SEGMENT = re.compile(r"_([a-z0-9])")


def camelize(name: str) -> str:
    """``previous_attributes`` → ``previousAttributes``."""
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name)


def adapt_list_metadata(response: Dict[str, Any]) -> Dict[str, Any]:
    """Accept either ``list_metadata`` or ``listMetadata`` and normalise to the former."""
    if "list_metadata" in response:
        return response
    adapted = dict(response)
    adapted["list_metadata"] = adapted.pop("listMetadata", None) or {}
    return adapted


def deserialize_list(response: Dict[str, Any], deserializer: Callable[[Dict[str, Any]], T]) -> WorkOSList[T]:
    """Build a WorkOSList from a ``{data, list_metadata}`` response.

    Args:
        response: Decoded list response
        deserializer: Mapper applied to every item in ``data``

    Returns:
        WorkOSList with deserialized items and cursors
    """
    response = adapt_list_metadata(response)
    metadata = response.get("list_metadata") or {}
    return WorkOSList(
        data=[deserializer(item) for item in response.get("data") or []],
        list_metadata=ListMetadata(before=metadata.get("before"), after=metadata.get("after")),
        object=response.get("object", "list"),
    )
