"""Document Store: контракт и реализации (Redis, in-memory)."""

from src.storage.base import (
    DeleteResult,
    Document,
    DocumentCollection,
    DocumentStore,
    InsertResult,
    Query,
    Update,
    UpdateResult,
)
from src.storage.factory import create_document_store
from src.storage.memory import MemoryCollection, MemoryDocumentStore
from src.storage.redis_store import RedisCollection, RedisDocumentStore

__all__ = [
    "DeleteResult",
    "Document",
    "DocumentCollection",
    "DocumentStore",
    "InsertResult",
    "MemoryCollection",
    "MemoryDocumentStore",
    "Query",
    "RedisCollection",
    "RedisDocumentStore",
    "Update",
    "UpdateResult",
    "create_document_store",
]
