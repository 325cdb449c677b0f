"""Redis Document Store.

Redis Schema:
    {namespace}:{collection}:ids        -> Set (все _id коллекции)
    {namespace}:{collection}:doc:{_id}  -> String (документ в JSON)

Изменяющие операции выполняются как WATCH/MULTI/EXEC транзакции
с повтором при WatchError, поэтому update_many атомарен: либо
изменяются все подходящие документы, либо ни один.
"""

from typing import Any

import orjson
from redis.asyncio import Redis
from redis.asyncio.client import Pipeline
from redis.exceptions import WatchError

from src.core.constants import ID_FIELD, REDIS_WATCH_MAX_RETRIES
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


def _dumps(document: Document) -> bytes:
    return orjson.dumps(document)


def _loads(payload: bytes | str) -> Document:
    return orjson.loads(payload)


class RedisCollection:
    """Коллекция документов в Redis."""

    def __init__(self, redis_client: Redis, namespace: str, name: str) -> None:
        """Инициализировать коллекцию.

        Args:
            redis_client: Async Redis client (общий для всех коллекций)
            namespace: Префикс ключей (имя базы)
            name: Имя коллекции

        """
        self.redis = redis_client
        self.name = name
        self._prefix = f"{namespace}:{name}"

    @property
    def ids_key(self) -> str:
        return f"{self._prefix}:ids"

    def doc_key(self, doc_id: str) -> str:
        return f"{self._prefix}:doc:{doc_id}"

    async def _load_all(self) -> list[Document]:
        ids = await self.redis.smembers(self.ids_key)  # type: ignore[misc]
        if not ids:
            return []
        keys = [self.doc_key(_decode(doc_id)) for doc_id in ids]
        payloads = await self.redis.mget(keys)
        return [_loads(payload) for payload in payloads if payload is not None]

    @store_errors
    async def find(self, query: Query | None = None, sort: SortSpec | None = None) -> list[Document]:
        documents = [doc for doc in await self._load_all() if matches(doc, query)]
        return sort_documents(documents, sort)

    @store_errors
    async def find_one(self, query: Query) -> Document | None:
        doc_id = query.get(ID_FIELD)
        if isinstance(doc_id, str):
            payload = await self.redis.get(self.doc_key(doc_id))
            if payload is None:
                return None
            document = _loads(payload)
            return document if matches(document, query) else None

        for document in await self._load_all():
            if matches(document, query):
                return document
        return None

    @store_errors
    async def insert_one(self, document: Document) -> InsertResult:
        stored = dict(document)
        stored.setdefault(ID_FIELD, new_object_id())
        doc_id = stored[ID_FIELD]

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self.doc_key(doc_id), _dumps(stored), nx=True)
            pipe.sadd(self.ids_key, doc_id)
            created, _ = await pipe.execute()

        if not created:
            msg = f"Duplicate _id '{doc_id}' in collection '{self.name}'"
            raise ValueError(msg)

        logger.debug("Документ вставлен", collection=self.name, doc_id=doc_id)
        return InsertResult(inserted_id=doc_id)

    async def _watch_candidates(self, pipe: Pipeline, query: Query) -> list[str]:
        """Поставить WATCH на ключи, которые может затронуть операция.

        Returns:
            Ключи документов-кандидатов
        """
        doc_id = query.get(ID_FIELD)
        if isinstance(doc_id, str):
            key = self.doc_key(doc_id)
            await pipe.watch(key)
            return [key]

        await pipe.watch(self.ids_key)
        ids = await pipe.smembers(self.ids_key)  # type: ignore[misc]
        keys = sorted(self.doc_key(_decode(i)) for i in ids)
        if keys:
            await pipe.watch(*keys)
        return keys

    async def _modify(self, query: Query, update: Update, *, many: bool) -> UpdateResult:
        for attempt in range(REDIS_WATCH_MAX_RETRIES):
            async with self.redis.pipeline(transaction=True) as pipe:
                try:
                    keys = await self._watch_candidates(pipe, query)
                    payloads = await pipe.mget(keys) if keys else []

                    matched = 0
                    changes: dict[str, Document] = {}
                    for key, payload in zip(keys, payloads, strict=True):
                        if payload is None:
                            continue
                        document = _loads(payload)
                        if not matches(document, query):
                            continue
                        matched += 1
                        updated = apply_update(document, update)
                        if updated != document:
                            changes[key] = updated
                        if not many:
                            break

                    if changes:
                        pipe.multi()
                        for key, document in changes.items():
                            pipe.set(key, _dumps(document))
                        await pipe.execute()

                    return UpdateResult(matched_count=matched, modified_count=len(changes))
                except WatchError:
                    logger.debug(
                        "Конкурентная запись, повтор транзакции",
                        collection=self.name,
                        attempt=attempt + 1,
                    )

        msg = f"Transaction on '{self.name}' aborted after {REDIS_WATCH_MAX_RETRIES} attempts"
        raise RuntimeError(msg)

    @store_errors
    async def update_one(self, query: Query, update: Update) -> UpdateResult:
        return await self._modify(query, update, many=False)

    @store_errors
    async def update_many(self, query: Query, update: Update) -> UpdateResult:
        return await self._modify(query, update, many=True)

    @store_errors
    async def delete_one(self, query: Query) -> DeleteResult:
        for _ in range(REDIS_WATCH_MAX_RETRIES):
            async with self.redis.pipeline(transaction=True) as pipe:
                try:
                    keys = await self._watch_candidates(pipe, query)
                    payloads = await pipe.mget(keys) if keys else []

                    target: Document | None = None
                    for payload in payloads:
                        if payload is not None and matches(document := _loads(payload), query):
                            target = document
                            break

                    if target is None:
                        return DeleteResult()

                    pipe.multi()
                    pipe.delete(self.doc_key(target[ID_FIELD]))
                    pipe.srem(self.ids_key, target[ID_FIELD])
                    await pipe.execute()
                    return DeleteResult(deleted_count=1)
                except WatchError:
                    continue

        msg = f"Delete on '{self.name}' aborted after {REDIS_WATCH_MAX_RETRIES} attempts"
        raise RuntimeError(msg)


def _decode(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


class RedisDocumentStore:
    """Redis-based document store.

    Один Redis client (пул соединений) на всё приложение,
    коллекции создаются лениво.
    """

    def __init__(self, redis_client: Redis, namespace: str) -> None:
        """Инициализировать store.

        Args:
            redis_client: Async Redis client
            namespace: Префикс ключей

        """
        self.redis = redis_client
        self.namespace = namespace
        self._collections: dict[str, RedisCollection] = {}

    def collection(self, name: str) -> RedisCollection:
        if name not in self._collections:
            self._collections[name] = RedisCollection(self.redis, self.namespace, name)
        return self._collections[name]

    async def health_check(self) -> bool:
        """Проверить доступность Redis.

        Returns:
            True если Redis доступен

        """
        try:
            await self.redis.ping()  # type: ignore[misc]
            return True
        except Exception as e:
            logger.warning("Redis недоступен", error=str(e))
            return False

    async def close(self) -> None:
        await self.redis.aclose()
        logger.info("Redis connection закрыт")
