import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from core.inventory_store import InventoryStore
from db.collection import MemoryDocumentCollection
from db.database import create_db_and_tables


@pytest.fixture
def documents() -> dict:
    """Records keyed by name, as the collection stores them"""
    return {
        "Bread": {"quantity": 5, "category": "Food", "description": "Sourdough", "price": 3.5, "supplier": "Acme"},
        "Headphones": {"quantity": 1, "category": "Electronics", "description": "", "price": 49.0, "supplier": "Cable Co"},
        "T-Shirt": {"quantity": 100, "category": "Clothing", "description": "Size M", "price": 9.5, "supplier": "Threads"},
    }


@pytest.fixture
def collection(documents: dict) -> MemoryDocumentCollection:
    return MemoryDocumentCollection("inventory", documents)


@pytest.fixture
def store(collection: MemoryDocumentCollection) -> InventoryStore:
    return InventoryStore(collection)


@pytest.fixture
async def sql_session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    await create_db_and_tables(engine)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()
