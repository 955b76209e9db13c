from typing import Iterable, List, Optional

from schemas.inventory import InventoryItem, InventoryView


def filter_items(
    items: Iterable[InventoryItem],
    query: str = "",
    category: Optional[str] = "",
) -> List[InventoryItem]:
    """Items whose name contains `query` (case-insensitive) and, when `category`
    is set, whose category equals it exactly. Input order is kept."""
    q = (query or "").lower()
    return [
        item
        for item in items
        if q in item.name.lower() and (not category or item.category == category)
    ]


def apply_view(items: Iterable[InventoryItem], view: InventoryView) -> List[InventoryItem]:
    return filter_items(items, view.query, view.category)
