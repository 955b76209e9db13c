from typing import Optional

from pydantic import BaseModel, field_validator


# Suggested categories; "" means none. Category is never validated against this list.
CATEGORIES = ("Food", "Electronics", "Clothing")

ATTRIBUTE_FIELDS = ("quantity", "category", "description", "price", "supplier")


def as_int(x) -> int:
    try:
        return int(x)
    except Exception:
        return 0


class InventoryItem(BaseModel):
    """One item as read back from the collection.

    Attributes are optional: a record written with only some fields still loads.
    """
    name: str
    quantity: Optional[int] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    supplier: Optional[str] = None

    # whatever is stored loads; an unreadable quantity counts as 0, an unreadable price as None
    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, v) -> Optional[int]:
        return None if v is None else as_int(v)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, v) -> Optional[float]:
        try:
            return None if v is None else float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("category", "description", "supplier", mode="before")
    @classmethod
    def _coerce_text(cls, v) -> Optional[str]:
        return None if v is None or isinstance(v, str) else str(v)

    @classmethod
    def from_document(cls, key: str, data: dict) -> "InventoryItem":
        # the document key is the name, whatever the document itself says
        return cls(**{**(data if isinstance(data, dict) else {}), "name": key})


class _ItemAttributes(BaseModel):
    quantity: int
    category: str = ""
    description: str = ""
    price: float = 0.0
    supplier: str = ""

    @field_validator("category", "description", "supplier", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("price")
    @classmethod
    def _price_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("price must be >= 0")
        return v

    def attributes(self) -> dict:
        return self.model_dump(include=set(ATTRIBUTE_FIELDS))


class InventoryItemCreate(_ItemAttributes):
    name: str
    quantity: int = 1

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("name is required")
        return v

    @field_validator("quantity")
    @classmethod
    def _quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("quantity must be > 0")
        return v


class InventoryItemUpdate(_ItemAttributes):
    """Full replacement of an item's attributes. The name comes from the path."""

    @field_validator("quantity")
    @classmethod
    def _quantity_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quantity must be >= 0")
        return v


class InventoryItemIncrement(BaseModel):
    """Optional attribute overrides sent along with an increment."""
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    supplier: Optional[str] = None

    @field_validator("price")
    @classmethod
    def _price_non_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("price must be >= 0")
        return v


class InventoryView(BaseModel):
    """Search text and category filter chosen by the viewer."""
    query: str = ""
    category: str = ""
