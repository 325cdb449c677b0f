"""In-memory Document Store.

Backend для разработки и тестов. Каждая операция выполняется под
asyncio.Lock коллекции, поэтому update_many атомарен относительно
других операций этой коллекции.
"""

import asyncio
import copy

from src.shared.errors import store_errors
from src.shared.logging import get_logger
from src.shared.utils import new_object_id
from src.storage.base import (
    DeleteResult,
    Document,
    InsertResult,
    Query,
    SortSpec,
    Update,
    UpdateResult,
)
from src.storage.query import apply_update, matches, sort_documents

logger = get_logger(__name__)


class MemoryCollection:
    """Коллекция документов в памяти процесса."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._documents: dict[str, Document] = {}
        self._lock = asyncio.Lock()

    @store_errors
    async def find(self, query: Query | None = None, sort: SortSpec | None = None) -> list[Document]:
        async with self._lock:
            found = [copy.deepcopy(doc) for doc in self._documents.values() if matches(doc, query)]
        return sort_documents(found, sort)

    @store_errors
    async def find_one(self, query: Query) -> Document | None:
        async with self._lock:
            for doc in self._documents.values():
                if matches(doc, query):
                    return copy.deepcopy(doc)
        return None

    @store_errors
    async def insert_one(self, document: Document) -> InsertResult:
        stored = copy.deepcopy(document)
        stored.setdefault("_id", new_object_id())
        async with self._lock:
            if stored["_id"] in self._documents:
                msg = f"Duplicate _id '{stored['_id']}' in collection '{self.name}'"
                raise ValueError(msg)
            self._documents[stored["_id"]] = stored
        return InsertResult(inserted_id=stored["_id"])

    @store_errors
    async def update_one(self, query: Query, update: Update) -> UpdateResult:
        async with self._lock:
            for doc_id, doc in self._documents.items():
                if matches(doc, query):
                    updated = apply_update(doc, update)
                    modified = updated != doc
                    if modified:
                        self._documents[doc_id] = updated
                    return UpdateResult(matched_count=1, modified_count=int(modified))
        return UpdateResult()

    @store_errors
    async def update_many(self, query: Query, update: Update) -> UpdateResult:
        matched = modified = 0
        async with self._lock:
            # Изменения применяются только после вычисления всех
            changes: dict[str, Document] = {}
            for doc_id, doc in self._documents.items():
                if matches(doc, query):
                    matched += 1
                    updated = apply_update(doc, update)
                    if updated != doc:
                        changes[doc_id] = updated
            self._documents.update(changes)
            modified = len(changes)
        return UpdateResult(matched_count=matched, modified_count=modified)

    @store_errors
    async def delete_one(self, query: Query) -> DeleteResult:
        async with self._lock:
            for doc_id, doc in self._documents.items():
                if matches(doc, query):
                    del self._documents[doc_id]
                    return DeleteResult(deleted_count=1)
        return DeleteResult()


class MemoryDocumentStore:
    """Store из коллекций в памяти процесса."""

    def __init__(self) -> None:
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name)
        return self._collections[name]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        logger.debug("MemoryDocumentStore закрыт", collections=list(self._collections))
