"""Taskly - Dependencies.

Dependency Injection для FastAPI. Все сервисы создаются в lifespan
и живут в app.state, между запросами кэшируется только подключение к store.
"""

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from config.settings import Settings
from src.services.identity import IdentityService
from src.services.notification_hub import NotificationHub
from src.services.task_service import TaskService
from src.storage import DocumentStore


# ==================== Configuration Dependencies ====================


def get_settings(connection: HTTPConnection) -> Settings:
    """Предоставляет settings приложения.

    Args:
        connection: HTTP запрос или WebSocket.

    Returns:
        Settings instance.

    """
    return connection.app.state.settings


# ==================== Storage Dependencies ====================


def get_document_store(connection: HTTPConnection) -> DocumentStore:
    """Предоставляет document store из состояния приложения."""
    return connection.app.state.store


# ==================== Service Dependencies ====================


def get_task_service(connection: HTTPConnection) -> TaskService:
    """Предоставляет Task Service."""
    return connection.app.state.task_service


def get_identity_service(connection: HTTPConnection) -> IdentityService:
    """Предоставляет Identity Service."""
    return connection.app.state.identity_service


def get_notification_hub(connection: HTTPConnection) -> NotificationHub:
    """Предоставляет Notification Hub.

    Returns:
        Общий для всех соединений NotificationHub.

    """
    return connection.app.state.hub


# ==================== Type Aliases ====================

SettingsDep = Annotated[Settings, Depends(get_settings)]
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]
NotificationHubDep = Annotated[NotificationHub, Depends(get_notification_hub)]
