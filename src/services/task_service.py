"""Task Service.

CRUD задач поверх Document Store: позиционные изменения делегируются
Ordering Engine, каждая успешная мутация рассылается через Notification Hub
ровно одним событием task-updated.

Форма payload события зависит от операции (клиенты на неё уже опираются):
    create / update -> полный документ
    reorder         -> {"id", "category", "index"}
    delete          -> строка _id
"""

from datetime import UTC, datetime
from typing import Any

from src.core.constants import (
    CATEGORY_FIELD,
    CREATED_AT_FIELD,
    ID_FIELD,
    IMMUTABLE_TASK_FIELDS,
    INDEX_FIELD,
    TASK_DELETED_MESSAGE,
    TASK_REORDERED_MESSAGE,
    TASK_UPDATED_EVENT,
)
from src.core.enums import IndexPolicy, TaskOperation
from src.services.notification_hub import NotificationHub
from src.services.ordering import OrderingEngine, validate_category, validate_index
from src.shared.errors import InvalidTaskIdError, TaskNotFoundError
from src.shared.logging import get_logger
from src.shared.utils import is_valid_object_id
from src.storage import Document, DocumentCollection, InsertResult

logger = get_logger(__name__)


def ensure_task_id(task_id: str) -> str:
    """Проверить формат _id до любого обращения к store.

    Raises:
        InvalidTaskIdError: Не 24 hex-символа
    """
    if not is_valid_object_id(task_id):
        raise InvalidTaskIdError(task_id)
    return task_id


class TaskService:
    """Сервис задач task board."""

    def __init__(
        self,
        tasks: DocumentCollection,
        engine: OrderingEngine,
        hub: NotificationHub,
        index_policy: IndexPolicy = IndexPolicy.CALLER_SPECIFIED,
    ) -> None:
        """Инициализировать сервис.

        Args:
            tasks: Коллекция задач
            engine: Ordering Engine над той же коллекцией
            hub: Notification Hub для рассылки
            index_policy: Политика выбора index при создании

        """
        self.tasks = tasks
        self.engine = engine
        self.hub = hub
        self.index_policy = index_policy

    async def _notify(self, operation: TaskOperation, payload: Any) -> None:
        delivered = await self.hub.broadcast_all(TASK_UPDATED_EVENT, payload)
        logger.debug("task-updated отправлено", operation=operation.value, delivered=delivered)

    async def list_tasks(self) -> list[Document]:
        """Все задачи всех категорий по возрастанию index."""
        return await self.tasks.find({}, sort=[(INDEX_FIELD, 1)])

    async def _resolve_index(self, category: str, requested: Any) -> int:
        if self.index_policy is IndexPolicy.APPEND_AT_END or requested is None:
            return await self.engine.next_index(category)
        await self.engine.insert_position(category, requested)
        return requested

    async def create_task(self, payload: dict[str, Any]) -> InsertResult:
        """Создать задачу.

        Args:
            payload: Документ от клиента, обязателен category

        Returns:
            Подтверждение вставки с назначенным _id

        """
        document = {key: value for key, value in payload.items() if key != ID_FIELD}
        category = document.get(CATEGORY_FIELD)
        validate_category(category)
        document[INDEX_FIELD] = await self._resolve_index(category, document.get(INDEX_FIELD))
        document[CREATED_AT_FIELD] = datetime.now(UTC)

        result = await self.tasks.insert_one(document)
        document[ID_FIELD] = result.inserted_id

        logger.info(
            "Задача создана",
            task_id=result.inserted_id,
            category=category,
            index=document[INDEX_FIELD],
        )
        await self._notify(TaskOperation.CREATED, document)
        return result

    async def update_task(self, task_id: str, patch: dict[str, Any]) -> Document:
        """Частичное обновление полей задачи.

        Задача без реальных изменений считается ненайденной, так же как
        отсутствующий _id.

        Args:
            task_id: _id задачи
            patch: Поля для $set

        Returns:
            Полный документ после обновления

        Raises:
            InvalidTaskIdError: Некорректный _id
            InvalidPositionError: Некорректные category или index в patch
            TaskNotFoundError: Нет задачи или patch ничего не изменил

        """
        ensure_task_id(task_id)
        changes = {key: value for key, value in patch.items() if key not in IMMUTABLE_TASK_FIELDS}
        # Поля порядка попадают в store только валидными
        if CATEGORY_FIELD in changes:
            validate_category(changes[CATEGORY_FIELD])
        if INDEX_FIELD in changes:
            validate_index(changes[INDEX_FIELD])
        query = {ID_FIELD: task_id}

        if changes:
            result = await self.tasks.update_one(query, {"$set": changes})
            modified = result.modified_count
        else:
            modified = 0

        if modified == 0:
            raise TaskNotFoundError(task_id)

        updated = await self.tasks.find_one(query)
        if updated is None:
            raise TaskNotFoundError(task_id)

        logger.info("Задача обновлена", task_id=task_id, fields=sorted(changes))
        await self._notify(TaskOperation.UPDATED, updated)
        return updated

    async def reorder_task(self, task_id: str, category: str, index: int) -> dict[str, str]:
        """Переместить задачу в (category, index).

        Raises:
            InvalidTaskIdError: Некорректный _id
            InvalidPositionError: Некорректная позиция
            TaskNotFoundError: Нет задачи

        """
        ensure_task_id(task_id)
        await self.engine.reorder(task_id, category, index)
        await self._notify(
            TaskOperation.REORDERED,
            {"id": task_id, CATEGORY_FIELD: category, INDEX_FIELD: index},
        )
        return {"message": TASK_REORDERED_MESSAGE}

    async def delete_task(self, task_id: str) -> dict[str, str]:
        """Удалить задачу.

        Raises:
            InvalidTaskIdError: Некорректный _id
            TaskNotFoundError: Нет задачи (событие не рассылается)

        """
        ensure_task_id(task_id)
        result = await self.tasks.delete_one({ID_FIELD: task_id})
        if result.deleted_count == 0:
            raise TaskNotFoundError(task_id)

        logger.info("Задача удалена", task_id=task_id)
        await self._notify(TaskOperation.DELETED, task_id)
        return {"message": TASK_DELETED_MESSAGE}
