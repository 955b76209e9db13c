"""
InventoryStore: the single gateway between callers and the item collection.

Every mutation is applied to the collection and then followed by a full
refresh, so `snapshot` mirrors the collection as of the last completed call.

Nothing here is locked. Read-modify-write on quantity is not atomic: two
overlapping adds on the same name can both read the same base quantity and
the last write wins.
"""

import enum
import logging
from typing import List, Optional

from pydantic import ValidationError

from core.errors import InvalidInput
from db.collection import DocumentCollection
from schemas.inventory import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemIncrement,
    InventoryItemUpdate,
    as_int,
)

logger = logging.getLogger(__name__)


class DecrementPolicy(str, enum.Enum):
    # keep category/description/price/supplier, only quantity changes
    PRESERVE = "preserve"
    # write the new quantity alone; the other attributes are dropped
    OVERWRITE = "overwrite"


def _validation_message(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}" for err in e.errors()
    )


def _validate(model, **data):
    try:
        return model(**data)
    except ValidationError as e:
        raise InvalidInput(_validation_message(e)) from e


def _require_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("name is required")
    return name


class InventoryStore:
    def __init__(
        self,
        collection: DocumentCollection,
        decrement_policy: DecrementPolicy = DecrementPolicy.PRESERVE,
    ):
        self.collection = collection
        self.decrement_policy = DecrementPolicy(decrement_policy)
        # None until the first successful refresh
        self._snapshot: Optional[List[InventoryItem]] = None

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> List[InventoryItem]:
        return list(self._snapshot or [])

    def get(self, name: str) -> Optional[InventoryItem]:
        """Look an item up by exact name in the current snapshot."""
        for item in self._snapshot or []:
            if item.name == name:
                return item
        return None

    async def refresh(self) -> List[InventoryItem]:
        """Replace the snapshot with every record in the collection.

        Raises StoreUnavailable if the collection can't be read; the previous
        snapshot is left in place.
        """
        docs = await self.collection.list_all()
        self._snapshot = [InventoryItem.from_document(key, data) for key, data in docs]
        logger.debug("[%s] refreshed %d items", self.collection.name, len(self._snapshot))
        return self.snapshot

    async def add_or_accumulate(
        self,
        name: str,
        quantity: int,
        category: str = "",
        description: str = "",
        price: float = 0.0,
        supplier: str = "",
    ) -> List[InventoryItem]:
        """Create the item, or add `quantity` to an existing one.

        On an existing record the quantities are summed and the other four
        attributes are replaced by the ones given here.
        """
        payload = _validate(
            InventoryItemCreate,
            name=name,
            quantity=quantity,
            category=category,
            description=description,
            price=price,
            supplier=supplier,
        )
        attrs = payload.attributes()
        existing = await self.collection.get(payload.name)
        if existing is not None:
            attrs["quantity"] = as_int(existing.get("quantity")) + payload.quantity
        await self.collection.put(payload.name, attrs)
        logger.info("[%s] add %r: quantity=%s", self.collection.name, payload.name, attrs["quantity"])
        return await self.refresh()

    async def increment(
        self,
        name: str,
        category: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[float] = None,
        supplier: Optional[str] = None,
    ) -> List[InventoryItem]:
        """Add one to an existing item. Attributes given here replace the
        stored ones; the rest are kept. Absent items are left alone."""
        _require_name(name)
        overrides = _validate(
            InventoryItemIncrement,
            category=category,
            description=description,
            price=price,
            supplier=supplier,
        ).model_dump(exclude_none=True)

        existing = await self.collection.get(name)
        if existing is None:
            logger.debug("[%s] increment %r: no such item", self.collection.name, name)
            return await self.refresh()

        attrs = {**existing, **overrides, "quantity": as_int(existing.get("quantity")) + 1}
        await self.collection.put(name, attrs)
        logger.info("[%s] increment %r: quantity=%s", self.collection.name, name, attrs["quantity"])
        return await self.refresh()

    async def decrement_or_remove(self, name: str) -> List[InventoryItem]:
        """Take one away; the record is deleted once quantity would reach 0.
        Absent items are a silent no-op."""
        existing = await self.collection.get(name)
        if existing is None:
            logger.debug("[%s] decrement %r: no such item", self.collection.name, name)
            return await self.refresh()

        quantity = as_int(existing.get("quantity"))
        if quantity <= 1:
            await self.collection.delete(name)
            logger.info("[%s] decrement %r: removed", self.collection.name, name)
        else:
            await self.collection.put(
                name,
                {"quantity": quantity - 1},
                merge=self.decrement_policy is DecrementPolicy.PRESERVE,
            )
            logger.info("[%s] decrement %r: quantity=%s", self.collection.name, name, quantity - 1)
        return await self.refresh()

    async def delete_item(self, name: str) -> List[InventoryItem]:
        await self.collection.delete(name)
        logger.info("[%s] delete %r", self.collection.name, name)
        return await self.refresh()

    async def edit_item(
        self,
        name: str,
        quantity: int,
        category: str = "",
        description: str = "",
        price: float = 0.0,
        supplier: str = "",
    ) -> List[InventoryItem]:
        """Overwrite every attribute of `name` (created if missing).
        A quantity of 0 removes the record."""
        _require_name(name)
        payload = _validate(
            InventoryItemUpdate,
            quantity=quantity,
            category=category,
            description=description,
            price=price,
            supplier=supplier,
        )
        if payload.quantity == 0:
            await self.collection.delete(name)
            logger.info("[%s] edit %r: quantity 0, removed", self.collection.name, name)
        else:
            await self.collection.put(name, payload.attributes())
            logger.info("[%s] edit %r", self.collection.name, name)
        return await self.refresh()
