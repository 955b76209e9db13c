import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from core.errors import InvalidInput, InventoryError, WriteConflict
from core.inventory_store import InventoryStore
from core.view_filter import apply_view
from schemas.inventory import (
    CATEGORIES,
    InventoryItem,
    InventoryItemCreate,
    InventoryItemIncrement,
    InventoryItemUpdate,
    InventoryView,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_inventory_store(request: Request) -> InventoryStore:
    return request.app.state.inventory_store


def _http_error(op: str, e: InventoryError) -> HTTPException:
    if isinstance(e, InvalidInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, WriteConflict):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    logger.error("[inventory] %s failed: %r", op, e)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"Inventory store unavailable: {e}")


@router.get("/", response_model=List[InventoryItem])
async def list_items(
    q: str = Query("", description="Case-insensitive name search"),
    category: str = Query("", description="Exact category; empty for all"),
    store: InventoryStore = Depends(get_inventory_store),
):
    try:
        items = await store.refresh()
    except InventoryError as e:
        raise _http_error("list", e) from e
    return apply_view(items, InventoryView(query=q, category=category))


@router.get("/categories", response_model=List[str])
async def list_categories():
    return list(CATEGORIES)


@router.post("/", response_model=List[InventoryItem], status_code=status.HTTP_201_CREATED)
async def add_item(payload: InventoryItemCreate, store: InventoryStore = Depends(get_inventory_store)):
    try:
        return await store.add_or_accumulate(
            payload.name,
            payload.quantity,
            payload.category,
            payload.description,
            payload.price,
            payload.supplier,
        )
    except InventoryError as e:
        raise _http_error("add", e) from e


@router.post("/{name}/increment", response_model=List[InventoryItem])
async def increment_item(
    name: str,
    payload: Optional[InventoryItemIncrement] = None,
    store: InventoryStore = Depends(get_inventory_store),
):
    try:
        return await store.increment(name, **(payload.model_dump() if payload else {}))
    except InventoryError as e:
        raise _http_error("increment", e) from e


@router.post("/{name}/decrement", response_model=List[InventoryItem])
async def decrement_item(name: str, store: InventoryStore = Depends(get_inventory_store)):
    try:
        return await store.decrement_or_remove(name)
    except InventoryError as e:
        raise _http_error("decrement", e) from e


@router.put("/{name}", response_model=List[InventoryItem])
async def edit_item(
    name: str,
    payload: InventoryItemUpdate,
    store: InventoryStore = Depends(get_inventory_store),
):
    try:
        return await store.edit_item(
            name,
            payload.quantity,
            payload.category,
            payload.description,
            payload.price,
            payload.supplier,
        )
    except InventoryError as e:
        raise _http_error("edit", e) from e


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(name: str, store: InventoryStore = Depends(get_inventory_store)):
    try:
        await store.delete_item(name)
    except InventoryError as e:
        raise _http_error("delete", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
