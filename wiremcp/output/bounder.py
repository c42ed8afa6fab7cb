"""
WireMCP Response Bounder

Keeps list-shaped payloads under a character budget by dropping whole
elements from the tail. The returned text is always a complete, parseable
serialization of the kept elements.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import structlog

logger = structlog.get_logger(__name__)


def serialize_json(items: Sequence[Any]) -> str:
    """Default serializer: indented JSON, as returned to tool callers."""
    return json.dumps(list(items), indent=2)


@dataclass
class BoundedPayload:
    """A serialized list that fits the budget."""

    text: str
    items: list[Any] = field(default_factory=list)
    truncated: bool = False
    original_count: int = 0

    @property
    def dropped(self) -> int:
        """Elements removed to fit the budget."""
        return self.original_count - len(self.items)


def bound_items(
    items: Sequence[Any],
    max_chars: int,
    serialize: Callable[[Sequence[Any]], str] = serialize_json,
) -> BoundedPayload:
    """
    Serialize ``items``, dropping tail elements until the text fits.

    Serialized length grows with the prefix length, so the longest fitting
    prefix is found by binary search.

    Args:
        items: Elements to serialize
        max_chars: Character budget for the serialized text
        serialize: Serializer for a list of elements

    Returns:
        BoundedPayload whose text is at most ``max_chars`` long

    Raises:
        ValueError: If even an empty list does not fit the budget
    """
    items = list(items)
    text = serialize(items)
    if len(text) <= max_chars:
        return BoundedPayload(text=text, items=items, original_count=len(items))

    low, high = 0, len(items) - 1
    while low < high:
        middle = (low + high + 1) // 2
        if len(serialize(items[:middle])) <= max_chars:
            low = middle
        else:
            high = middle - 1

    kept = items[:low]
    text = serialize(kept)
    if len(text) > max_chars:
        raise ValueError(f"Budget of {max_chars} characters cannot hold an empty payload")

    logger.info(
        "response_truncated",
        kept=len(kept),
        dropped=len(items) - len(kept),
        max_chars=max_chars,
    )
    return BoundedPayload(
        text=text,
        items=kept,
        truncated=True,
        original_count=len(items),
    )
