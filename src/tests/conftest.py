"""Общие фикстуры для тестов Taskly."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.websockets import WebSocketState

from config.settings import Settings
from src.app import create_app
from src.core.constants import TASKS_COLLECTION, USERS_COLLECTION
from src.services.identity import IdentityService
from src.services.notification_hub import NotificationHub
from src.services.ordering import OrderingEngine
from src.services.task_service import TaskService
from src.storage import MemoryCollection, MemoryDocumentStore

WELCOME_MESSAGE = "Welcome to the task manager!"


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    """In-memory store."""
    return MemoryDocumentStore()


@pytest.fixture
def tasks_collection(memory_store: MemoryDocumentStore) -> MemoryCollection:
    """Коллекция задач."""
    return memory_store.collection(TASKS_COLLECTION)


@pytest.fixture
def users_collection(memory_store: MemoryDocumentStore) -> MemoryCollection:
    """Коллекция пользователей."""
    return memory_store.collection(USERS_COLLECTION)


@pytest.fixture
def engine(tasks_collection: MemoryCollection) -> OrderingEngine:
    """Ordering Engine над in-memory коллекцией."""
    return OrderingEngine(tasks_collection)


@pytest.fixture
def mock_hub() -> MagicMock:
    """Mock Notification Hub, записывающий рассылки."""
    hub = MagicMock(spec=NotificationHub)
    hub.broadcast_all = AsyncMock(return_value=1)
    return hub


@pytest.fixture
def task_service(
    tasks_collection: MemoryCollection,
    engine: OrderingEngine,
    mock_hub: MagicMock,
) -> TaskService:
    """TaskService с mock hub."""
    return TaskService(tasks_collection, engine, mock_hub)


@pytest.fixture
def identity_service(users_collection: MemoryCollection) -> IdentityService:
    """IdentityService над in-memory коллекцией."""
    return IdentityService(users_collection)


@pytest.fixture
def mock_websocket() -> MagicMock:
    """Mock WebSocket в состоянии CONNECTED."""
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    websocket.send_text = AsyncMock()
    websocket.client_state = WebSocketState.CONNECTED
    return websocket


@pytest.fixture
def app_settings() -> Settings:
    """Настройки приложения с in-memory store."""
    return Settings(_env_file=None, store_backend="memory")


@pytest.fixture
def app(app_settings: Settings) -> FastAPI:
    """Приложение Taskly для тестов."""
    return create_app(app_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client с выполненным lifespan."""
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
