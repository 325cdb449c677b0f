"""Интеграционные тесты для RedisDocumentStore.

Требуют запущенный Redis (REDIS_URL, по умолчанию redis://localhost:6379/15).
Без Redis тесты пропускаются.
"""

import asyncio
import os
import uuid
from collections import Counter
from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.asyncio import Redis

from src.services.ordering import OrderingEngine
from src.services.task_service import TaskService
from src.storage import RedisCollection, RedisDocumentStore

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
async def redis_store() -> AsyncIterator[RedisDocumentStore]:
    """RedisDocumentStore с уникальным namespace, очищается после теста."""
    client = Redis.from_url(REDIS_URL, socket_connect_timeout=1)
    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis is not available: {e}")

    namespace = f"test:{uuid.uuid4().hex}"
    store = RedisDocumentStore(client, namespace=namespace)

    yield store

    async for key in client.scan_iter(match=f"{namespace}:*"):
        await client.delete(key)
    await store.close()


@pytest.fixture
def redis_tasks(redis_store: RedisDocumentStore) -> RedisCollection:
    """Коллекция задач в Redis."""
    return redis_store.collection("tasks")


@pytest.mark.integration
@pytest.mark.requires_redis
class TestRedisCollection:
    """CRUD операции RedisCollection."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, redis_tasks: RedisCollection) -> None:
        """Вставка и поиск по _id и по фильтру."""
        result = await redis_tasks.insert_one({"title": "a", "category": "todo", "index": 0})

        by_id = await redis_tasks.find_one({"_id": result.inserted_id})
        by_filter = await redis_tasks.find({"category": "todo"})

        assert by_id["title"] == "a"
        assert [doc["_id"] for doc in by_filter] == [result.inserted_id]

    @pytest.mark.asyncio
    async def test_find_sorted(self, redis_tasks: RedisCollection) -> None:
        """find сортирует по index."""
        for index in (2, 0, 1):
            await redis_tasks.insert_one({"category": "todo", "index": index})

        documents = await redis_tasks.find({}, sort=[("index", 1)])

        assert [doc["index"] for doc in documents] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_update_one_and_many(self, redis_tasks: RedisCollection) -> None:
        """update_one и update_many считают matched/modified."""
        ids = [(await redis_tasks.insert_one({"category": "todo", "index": i})).inserted_id for i in range(3)]

        one = await redis_tasks.update_one({"_id": ids[0]}, {"$set": {"title": "first"}})
        many = await redis_tasks.update_many({"category": "todo", "index": {"$gte": 1}}, {"$inc": {"index": 1}})
        noop = await redis_tasks.update_one({"_id": ids[0]}, {"$set": {"title": "first"}})

        assert (one.matched_count, one.modified_count) == (1, 1)
        assert (many.matched_count, many.modified_count) == (2, 2)
        assert (noop.matched_count, noop.modified_count) == (1, 0)
        documents = await redis_tasks.find({}, sort=[("index", 1)])
        assert [doc["index"] for doc in documents] == [0, 2, 3]

    @pytest.mark.asyncio
    async def test_delete_one(self, redis_tasks: RedisCollection) -> None:
        """delete_one удаляет документ и его _id из индекса."""
        result = await redis_tasks.insert_one({"title": "a"})

        deleted = await redis_tasks.delete_one({"_id": result.inserted_id})
        missing = await redis_tasks.delete_one({"_id": result.inserted_id})

        assert deleted.deleted_count == 1
        assert missing.deleted_count == 0
        assert await redis_tasks.find() == []

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(self, redis_tasks: RedisCollection) -> None:
        """Конкурентные update_many не теряют изменения (WATCH/MULTI/EXEC)."""
        result = await redis_tasks.insert_one({"category": "todo", "index": 0})

        await asyncio.gather(
            *(redis_tasks.update_many({"category": "todo"}, {"$inc": {"index": 1}}) for _ in range(10))
        )

        document = await redis_tasks.find_one({"_id": result.inserted_id})
        assert document["index"] == 10

    @pytest.mark.asyncio
    async def test_health_check(self, redis_store: RedisDocumentStore) -> None:
        """Redis отвечает на ping."""
        assert await redis_store.health_check() is True


@pytest.mark.integration
@pytest.mark.requires_redis
class TestTaskServiceOnRedis:
    """Сценарии task board поверх Redis."""

    @pytest.mark.asyncio
    async def test_create_into_occupied_position(self, redis_tasks: RedisCollection) -> None:
        """Новая задача на занятой позиции сдвигает прежнюю."""
        hub = MagicMock()
        hub.broadcast_all = AsyncMock(return_value=1)
        service = TaskService(redis_tasks, OrderingEngine(redis_tasks), hub)

        first = await service.create_task({"title": "A", "category": "todo", "index": 0})
        second = await service.create_task({"title": "B", "category": "todo", "index": 0})

        positions = {task["_id"]: task["index"] for task in await service.list_tasks()}
        assert positions == {first.inserted_id: 1, second.inserted_id: 0}
        assert isinstance((await redis_tasks.find_one({"_id": first.inserted_id}))["createdAt"], str)

    @pytest.mark.asyncio
    async def test_sequential_reorders_keep_indices_unique(self, redis_tasks: RedisCollection) -> None:
        """Последовательные перемещения сохраняют уникальность index."""
        engine = OrderingEngine(redis_tasks)
        ids = [(await redis_tasks.insert_one({"category": "todo", "index": i})).inserted_id for i in range(4)]

        for task_id, index in zip(ids, (3, 0, 2, 1), strict=True):
            await engine.reorder(task_id, "todo", index)

        counts = Counter(doc["index"] for doc in await redis_tasks.find({"category": "todo"}))
        assert all(count == 1 for count in counts.values())
