"""Ordering Engine.

Поддерживает уникальный index задач внутри категории при перемещениях
(drag & drop) и вставках.

Алгоритм перемещения:
    1. Загрузить задачу по _id (нет - TaskNotFoundError)
    2. Проверить, занята ли позиция (category, index) другой задачей
    3. Если занята - атомарно сдвинуть все задачи категории с index >= target
       на +1, исключая саму перемещаемую задачу
    4. Записать задаче новые category и index

Шаги 2-4 - три отдельные операции store и атомарны только по отдельности.
Два конкурентных перемещения в одну категорию могут оставить дубликат index.
Флаг serialize_moves сериализует их внутри одного процесса, но не между процессами.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from src.core.constants import CATEGORY_FIELD, ID_FIELD, INDEX_FIELD
from src.shared.errors import InvalidPositionError, TaskNotFoundError
from src.shared.logging import get_logger
from src.storage import Document, DocumentCollection

logger = get_logger(__name__)


def validate_category(category: Any) -> None:
    """Категория - непустая строка."""
    if not isinstance(category, str) or not category.strip():
        raise InvalidPositionError(CATEGORY_FIELD, category)


def validate_index(index: Any) -> None:
    """Позиция - неотрицательный int (bool не считается)."""
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise InvalidPositionError(INDEX_FIELD, index)


def validate_position(category: Any, index: Any) -> None:
    """Проверить целевую позицию.

    Args:
        category: Категория (непустая строка)
        index: Позиция (неотрицательный int, не bool)

    Raises:
        InvalidPositionError: Позиция некорректна

    """
    validate_category(category)
    validate_index(index)


class OrderingEngine:
    """Вычисляет и применяет изменения позиций задач."""

    def __init__(self, tasks: DocumentCollection, *, serialize_moves: bool = False) -> None:
        """Инициализировать engine.

        Args:
            tasks: Коллекция задач
            serialize_moves: Сериализовать операции одной категории через asyncio.Lock

        """
        self.tasks = tasks
        self.serialize_moves = serialize_moves
        self._category_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def _guard(self, category: str) -> AsyncIterator[None]:
        if not self.serialize_moves:
            yield
            return
        async with self._category_locks[category]:
            yield

    async def next_index(self, category: str) -> int:
        """Позиция в конце категории.

        Args:
            category: Категория

        Returns:
            max(index) + 1, или 0 для пустой категории

        """
        documents = await self.tasks.find({CATEGORY_FIELD: category})
        indices = [doc[INDEX_FIELD] for doc in documents if isinstance(doc.get(INDEX_FIELD), int)]
        return max(indices) + 1 if indices else 0

    async def make_room(self, category: str, index: int, *, exclude_id: str | None = None) -> int:
        """Освободить позицию (category, index), если она занята.

        Args:
            category: Категория
            index: Позиция
            exclude_id: Задача, которую не нужно ни учитывать как занявшую, ни сдвигать

        Returns:
            Количество сдвинутых задач

        """
        occupied_query: dict[str, Any] = {CATEGORY_FIELD: category, INDEX_FIELD: index}
        shift_query: dict[str, Any] = {CATEGORY_FIELD: category, INDEX_FIELD: {"$gte": index}}
        if exclude_id is not None:
            occupied_query[ID_FIELD] = {"$ne": exclude_id}
            shift_query[ID_FIELD] = {"$ne": exclude_id}

        occupant = await self.tasks.find_one(occupied_query)
        if occupant is None:
            return 0

        result = await self.tasks.update_many(shift_query, {"$inc": {INDEX_FIELD: 1}})
        logger.debug(
            "Позиция освобождена",
            category=category,
            index=index,
            occupant_id=occupant.get(ID_FIELD),
            shifted=result.modified_count,
        )
        return result.modified_count

    async def insert_position(self, category: str, index: int) -> None:
        """Подготовить позицию для новой задачи."""
        validate_position(category, index)
        async with self._guard(category):
            await self.make_room(category, index)

    async def reorder(self, task_id: str, category: str, index: int) -> Document:
        """Переместить задачу в (category, index).

        Args:
            task_id: Валидный _id задачи
            category: Целевая категория
            index: Целевая позиция

        Returns:
            Обновлённый документ задачи

        Raises:
            InvalidPositionError: Некорректная позиция
            TaskNotFoundError: Задачи нет

        """
        validate_position(category, index)

        async with self._guard(category):
            current = await self.tasks.find_one({ID_FIELD: task_id})
            if current is None:
                raise TaskNotFoundError(task_id)

            shifted = await self.make_room(category, index, exclude_id=task_id)

            result = await self.tasks.update_one(
                {ID_FIELD: task_id},
                {"$set": {CATEGORY_FIELD: category, INDEX_FIELD: index}},
            )
            # Задачу удалили между чтением и записью
            if result.matched_count == 0:
                raise TaskNotFoundError(task_id)

        logger.info(
            "Задача перемещена",
            task_id=task_id,
            from_category=current.get(CATEGORY_FIELD),
            from_index=current.get(INDEX_FIELD),
            to_category=category,
            to_index=index,
            shifted=shifted,
        )

        updated = dict(current)
        updated[CATEGORY_FIELD] = category
        updated[INDEX_FIELD] = index
        return updated
