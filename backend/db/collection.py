"""
Keyed document collections.

A collection maps a string key to a dict of attributes. Backends:
- SqlDocumentCollection: rows of the `documents` table, one async session per call
- MemoryDocumentCollection: a dict held in-process (tests, local runs)

put() overwrites the whole document unless merge=True, in which case only the
supplied fields are replaced. delete() of an absent key succeeds.
"""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.config import settings
from core.errors import StoreUnavailable, WriteConflict
from .database import Document, async_session_maker

logger = logging.getLogger(__name__)

Attributes = Dict[str, object]


def _as_document(data) -> Attributes:
    return dict(data) if isinstance(data, dict) else {}


class DocumentCollection(ABC):
    name: str

    @abstractmethod
    async def list_all(self) -> List[Tuple[str, Attributes]]:
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[Attributes]:
        ...

    @abstractmethod
    async def put(self, key: str, data: Attributes, merge: bool = False) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...


class SqlDocumentCollection(DocumentCollection):
    def __init__(self, session_maker: async_sessionmaker, name: str):
        self._session_maker = session_maker
        self.name = name

    @asynccontextmanager
    async def _session(self, op: str):
        try:
            async with self._session_maker() as db:
                yield db
        except IntegrityError as e:
            # only reachable when two first inserts of one key race
            logger.warning("[%s] %s conflicted: %r", self.name, op, e)
            raise WriteConflict(f"Conflicting {op} in collection {self.name!r}: {e}") from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("[%s] %s failed: %r", self.name, op, e)
            raise StoreUnavailable(f"Failed to {op} in collection {self.name!r}: {e}") from e

    async def list_all(self) -> List[Tuple[str, Attributes]]:
        async with self._session("list") as db:
            res = await db.execute(select(Document).where(Document.collection == self.name))
            return [(d.key, _as_document(d.data)) for d in res.scalars().all()]

    async def get(self, key: str) -> Optional[Attributes]:
        async with self._session("get") as db:
            d = await db.get(Document, (self.name, key))
            if d is None:
                return None
            return _as_document(d.data)

    async def put(self, key: str, data: Attributes, merge: bool = False) -> None:
        async with self._session("put") as db:
            d = await db.get(Document, (self.name, key))
            if d is None:
                db.add(Document(collection=self.name, key=key, data=dict(data)))
            elif merge:
                # reassign so the JSON column is flagged dirty
                d.data = {**(d.data or {}), **data}
            else:
                d.data = dict(data)
            await db.commit()

    async def delete(self, key: str) -> None:
        async with self._session("delete") as db:
            await db.execute(
                delete(Document).where(Document.collection == self.name, Document.key == key)
            )
            await db.commit()


class MemoryDocumentCollection(DocumentCollection):
    """In-process collection. Every call yields to the event loop once, like a
    remote round trip would, so concurrent callers interleave."""

    def __init__(self, name: str, documents: Optional[Dict[str, Attributes]] = None):
        self.name = name
        self._documents: Dict[str, Attributes] = copy.deepcopy(documents or {})

    async def list_all(self) -> List[Tuple[str, Attributes]]:
        await asyncio.sleep(0)
        return [(k, copy.deepcopy(v)) for k, v in self._documents.items()]

    async def get(self, key: str) -> Optional[Attributes]:
        await asyncio.sleep(0)
        if key not in self._documents:
            return None
        return copy.deepcopy(self._documents[key])

    async def put(self, key: str, data: Attributes, merge: bool = False) -> None:
        await asyncio.sleep(0)
        if merge and key in self._documents:
            self._documents[key] = {**self._documents[key], **copy.deepcopy(data)}
        else:
            self._documents[key] = copy.deepcopy(data)

    async def delete(self, key: str) -> None:
        await asyncio.sleep(0)
        self._documents.pop(key, None)


def collection_from_settings() -> DocumentCollection:
    if settings.inventory_backend == "memory":
        return MemoryDocumentCollection(settings.inventory_collection)
    if settings.inventory_backend != "sql":
        raise ValueError(f"Unknown INVENTORY_BACKEND: {settings.inventory_backend!r}")
    return SqlDocumentCollection(async_session_maker, settings.inventory_collection)
