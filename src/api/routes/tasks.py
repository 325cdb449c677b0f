"""Tasks API Routes для Taskly.

CRUD и drag & drop перемещение задач. Каждая успешная мутация
рассылается observers событием task-updated.
"""

from typing import Any

from fastapi import APIRouter, Body

from src.api.schemas import CreateTaskRequest, InsertResult, MessageResponse, ReorderTaskRequest
from src.core.dependencies import TaskServiceDep
from src.shared.errors import InvalidArgumentError, StoreFailureError, TaskNotFoundError
from src.storage import Document

router = APIRouter(prefix="/tasks", tags=["tasks"])

_STORE_FAILURE = {500: StoreFailureError.openapi_response()}


@router.get(
    "",
    summary="Список задач",
    description="Все задачи всех категорий по возрастанию index. Группировка по колонкам - на клиенте.",
    responses=_STORE_FAILURE,
)
async def list_tasks(service: TaskServiceDep) -> list[Document]:
    """Получить все задачи.

    Это же путь восстановления состояния для observer после переподключения.
    """
    return await service.list_tasks()


@router.post(
    "",
    response_model=InsertResult,
    summary="Создать задачу",
    responses=_STORE_FAILURE,
)
async def create_task(request: CreateTaskRequest, service: TaskServiceDep) -> InsertResult:
    """Создать задачу.

    Args:
        request: Документ задачи (category обязательна, прочие поля проходят как есть)

    Returns:
        Подтверждение вставки {"acknowledged": true, "insertedId": "..."}

    """
    return await service.create_task(request.model_dump(exclude_unset=True))


@router.put(
    "/reorder/{task_id}",
    response_model=MessageResponse,
    summary="Переместить задачу",
    description="Меняет category и index задачи, сдвигая занявшие позицию задачи вниз",
    responses={
        400: InvalidArgumentError.openapi_response(),
        404: TaskNotFoundError.openapi_response(),
        **_STORE_FAILURE,
    },
)
async def reorder_task(task_id: str, request: ReorderTaskRequest, service: TaskServiceDep) -> dict[str, str]:
    """Drag & drop перемещение задачи."""
    return await service.reorder_task(task_id, request.category, request.index)


@router.put(
    "/{task_id}",
    summary="Обновить задачу",
    description="Частичное обновление: меняются только переданные поля",
    responses={
        400: InvalidArgumentError.openapi_response(),
        404: TaskNotFoundError.openapi_response(),
        **_STORE_FAILURE,
    },
)
async def update_task(
    task_id: str,
    service: TaskServiceDep,
    patch: dict[str, Any] = Body(default_factory=dict),
) -> Document:
    """Обновить поля задачи.

    Returns:
        Полный документ после обновления

    """
    return await service.update_task(task_id, patch)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Удалить задачу",
    responses={
        400: InvalidArgumentError.openapi_response(),
        404: TaskNotFoundError.openapi_response(),
        **_STORE_FAILURE,
    },
)
async def delete_task(task_id: str, service: TaskServiceDep) -> dict[str, str]:
    """Удалить задачу без возможности восстановления."""
    return await service.delete_task(task_id)
