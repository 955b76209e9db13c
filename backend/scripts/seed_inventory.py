import argparse
import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

"""
Seed a few demo inventory items (idempotent: existing names are skipped).

Run locally:
  python backend/scripts/seed_inventory.py
  python backend/scripts/seed_inventory.py --dry-run

It uses the same DATABASE_* / INVENTORY_* env vars as the backend.
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import settings  # noqa: E402
from core.inventory_store import InventoryStore  # noqa: E402
from db.collection import SqlDocumentCollection, collection_from_settings  # noqa: E402
from db.database import create_db_and_tables  # noqa: E402


@dataclass(frozen=True)
class SeedItem:
    name: str
    quantity: int
    category: str = ""
    description: str = ""
    price: float = 0.0
    supplier: str = ""


SEED_ITEMS: list[SeedItem] = [
    SeedItem(name="Bread", quantity=4, category="Food", description="Sourdough loaf", price=3.5, supplier="Acme Bakery"),
    SeedItem(name="Milk", quantity=6, category="Food", description="1L whole milk", price=1.2, supplier="Green Farms"),
    SeedItem(name="USB-C Cable", quantity=10, category="Electronics", description="1m braided", price=7.99, supplier="Cable Co"),
    SeedItem(name="Headphones", quantity=2, category="Electronics", price=49.0, supplier="Cable Co"),
    SeedItem(name="T-Shirt", quantity=12, category="Clothing", description="Cotton, size M", price=9.5, supplier="Threads"),
    SeedItem(name="Batteries", quantity=20, description="AA, pack of 4", price=4.25),
]


async def run(dry_run: bool) -> None:
    collection = collection_from_settings()
    if isinstance(collection, SqlDocumentCollection):
        await create_db_and_tables()
    store = InventoryStore(collection, decrement_policy=settings.decrement_policy)
    await store.refresh()

    created = 0
    for s in SEED_ITEMS:
        if store.get(s.name) is not None:
            continue
        if dry_run:
            print(f"Would add {s.name!r} x{s.quantity}")
        else:
            await store.add_or_accumulate(s.name, s.quantity, s.category, s.description, s.price, s.supplier)
        created += 1

    print(f"Done. Items {'to add' if dry_run else 'added'}: {created}. Total items: {len(store.snapshot)}.")


def main() -> None:
    p = argparse.ArgumentParser(description="Seed demo inventory items")
    p.add_argument("--dry-run", action="store_true", help="Do not write, just print what would be added")
    args = p.parse_args()
    asyncio.run(run(args.dry_run))


if __name__ == "__main__":
    main()
