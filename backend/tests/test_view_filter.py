"""Tests for the inventory list filter"""

import pytest

from core.view_filter import apply_view, filter_items
from schemas.inventory import InventoryItem, InventoryView


@pytest.fixture
def items() -> list[InventoryItem]:
    return [
        InventoryItem(name="Bread", quantity=2, category="Food"),
        InventoryItem(name="USB-C Cable", quantity=10, category="Electronics"),
        InventoryItem(name="Shortbread", quantity=1, category="Food"),
        InventoryItem(name="Mystery box", quantity=3, category=None),
    ]


class TestFilterItems:
    def test_empty_query_and_category_returns_input_unchanged(self, items) -> None:
        assert filter_items(items, "", "") == items

    def test_search_is_case_insensitive(self, items) -> None:
        result = filter_items(items, "bread", "")
        assert [i.name for i in result] == ["Bread", "Shortbread"]

    def test_uppercase_query_matches_lowercase_name(self, items) -> None:
        assert [i.name for i in filter_items(items, "CABLE")] == ["USB-C Cable"]

    def test_category_must_match_exactly(self, items) -> None:
        assert [i.name for i in filter_items(items, "", "Food")] == ["Bread", "Shortbread"]
        assert filter_items(items, "", "food") == []

    def test_query_and_category_combine(self, items) -> None:
        assert [i.name for i in filter_items(items, "short", "Food")] == ["Shortbread"]
        assert filter_items(items, "cable", "Food") == []

    def test_unset_category_keeps_uncategorised_items(self, items) -> None:
        assert "Mystery box" in [i.name for i in filter_items(items, "box", None)]

    def test_category_filter_excludes_uncategorised_items(self, items) -> None:
        assert "Mystery box" not in [i.name for i in filter_items(items, "", "Food")]

    def test_order_follows_input(self, items) -> None:
        reversed_items = list(reversed(items))
        assert filter_items(reversed_items, "") == reversed_items

    def test_no_match_returns_empty_list(self, items) -> None:
        assert filter_items(items, "zzz") == []


def test_apply_view_uses_query_and_category(items) -> None:
    view = InventoryView(query="BREAD", category="Food")
    assert [i.name for i in apply_view(items, view)] == ["Bread", "Shortbread"]


def test_default_view_shows_everything(items) -> None:
    assert apply_view(items, InventoryView()) == items
