"""
Tests for the response bounder.
"""

import json

import pytest

from wiremcp.output.bounder import bound_items, serialize_json


def _items(count: int) -> list[dict]:
    return [{"frame_number": str(n), "payload": "x" * 50} for n in range(1, count + 1)]


class TestBoundItems:
    """Tests for bound_items."""

    def test_within_budget_unchanged(self):
        """Payloads that fit are returned whole."""
        items = _items(10)
        payload = bound_items(items, max_chars=10_000)

        assert payload.items == items
        assert not payload.truncated
        assert payload.dropped == 0
        assert payload.text == serialize_json(items)

    def test_exact_fit(self):
        """A payload exactly at the budget is not truncated."""
        items = _items(5)
        payload = bound_items(items, max_chars=len(serialize_json(items)))
        assert not payload.truncated

    def test_truncates_from_tail(self):
        """Over-budget payloads keep a prefix of whole elements."""
        items = _items(200)
        payload = bound_items(items, max_chars=2_000)

        assert payload.truncated
        assert len(payload.text) <= 2_000
        assert 0 < len(payload.items) < 200
        assert payload.items == items[: len(payload.items)]
        assert payload.dropped == 200 - len(payload.items)

    def test_keeps_longest_prefix(self):
        """One more element would not have fit."""
        items = _items(200)
        payload = bound_items(items, max_chars=2_000)
        kept = len(payload.items)
        assert len(serialize_json(items[: kept + 1])) > 2_000

    def test_truncated_text_is_valid_json(self):
        """The kept text always parses back to the kept elements."""
        items = _items(500)
        payload = bound_items(items, max_chars=5_000)
        assert json.loads(payload.text) == payload.items

    def test_idempotent(self):
        """Bounding an already bounded payload changes nothing."""
        first = bound_items(_items(300), max_chars=3_000)
        second = bound_items(first.items, max_chars=3_000)

        assert second.text == first.text
        assert second.items == first.items
        assert not second.truncated

    def test_single_oversized_element(self):
        """An element larger than the budget leaves an empty list."""
        payload = bound_items([{"blob": "y" * 1_000}], max_chars=100)

        assert payload.items == []
        assert payload.text == "[]"
        assert payload.truncated

    def test_budget_too_small_for_empty(self):
        """A budget that cannot hold an empty list is rejected."""
        with pytest.raises(ValueError):
            bound_items([1], max_chars=1)

    def test_custom_serializer(self):
        """Any monotone serializer can be used."""
        items = [f"10.0.0.{n}" for n in range(100)]
        payload = bound_items(items, max_chars=50, serialize="\n".join)

        assert len(payload.text) <= 50
        assert payload.text.splitlines() == payload.items

    def test_empty_input(self):
        """An empty list serializes to an empty array."""
        payload = bound_items([], max_chars=10)
        assert payload.text == "[]"
        assert not payload.truncated
