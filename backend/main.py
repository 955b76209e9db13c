import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.errors import StoreUnavailable
from core.inventory_store import InventoryStore
from db.collection import SqlDocumentCollection, collection_from_settings
from db.database import create_db_and_tables
from routers.inventory import router as inventory_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    collection = collection_from_settings()
    if isinstance(collection, SqlDocumentCollection):
        await create_db_and_tables()
    store = InventoryStore(collection, decrement_policy=settings.decrement_policy)
    try:
        await store.refresh()
    except StoreUnavailable as e:
        # the first list request will try again
        logger.warning("Initial inventory refresh failed: %s", e)
    app.state.inventory_store = store
    yield


app = FastAPI(
    title="Inventory Tracker API",
    description="API for tracking named inventory items",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {"status": "healthy"}


app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
