"""Создание Document Store по настройкам."""

from redis.asyncio import Redis

from config.settings import Settings
from src.core.enums import StoreBackend
from src.shared.errors import StoreUnavailableError
from src.shared.logging import get_logger
from src.storage.base import DocumentStore
from src.storage.memory import MemoryDocumentStore
from src.storage.redis_store import RedisDocumentStore

logger = get_logger(__name__)


async def create_document_store(settings: Settings) -> DocumentStore:
    """Создать store с проверкой подключения.

    Args:
        settings: Настройки приложения

    Returns:
        Настроенный DocumentStore

    Raises:
        StoreUnavailableError: Redis не отвечает на ping

    """
    backend = StoreBackend(settings.store_backend)

    if backend is StoreBackend.MEMORY:
        logger.warning("Используется in-memory store: данные не переживут рестарт")
        return MemoryDocumentStore()

    redis_client = Redis.from_url(
        settings.redis_url,
        decode_responses=False,
        socket_timeout=settings.store_timeout_seconds,
        socket_connect_timeout=settings.store_timeout_seconds,
    )
    store = RedisDocumentStore(redis_client, namespace=settings.database_name)

    if not await store.health_check():
        await store.close()
        raise StoreUnavailableError(message=f"Не удалось подключиться к Redis: {settings.redis_url}")

    logger.info("RedisDocumentStore создан", redis_url=settings.redis_url, namespace=settings.database_name)
    return store
