"""Base types и Protocol для Document Store.

Store - внешний коллаборатор: коллекции JSON-документов с фильтрами
в стиле MongoDB. Каждая отдельная операция атомарна на уровне store,
последовательности операций - нет.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

Document = dict[str, Any]
Query = dict[str, Any]
Update = dict[str, Any]
SortSpec = list[tuple[str, int]]


class InsertResult(BaseModel):
    """Подтверждение вставки."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(default=True, description="Запись принята store")
    inserted_id: str = Field(alias="insertedId", description="Назначенный _id")


class UpdateResult(BaseModel):
    """Результат update_one / update_many."""

    matched_count: int = Field(default=0, description="Документов под фильтром")
    modified_count: int = Field(default=0, description="Документов, которые реально изменились")


class DeleteResult(BaseModel):
    """Результат delete_one."""

    deleted_count: int = Field(default=0, description="Удалено документов")


@runtime_checkable
class DocumentCollection(Protocol):
    """Protocol для коллекции документов.

    Фильтры: {field: value} для равенства и {field: {"$gte": v}} для
    операторов $eq, $ne, $gt, $gte, $lt, $lte, $in.
    Обновления: {"$set": {...}} и {"$inc": {...}}.
    """

    name: str

    async def find(self, query: Query | None = None, sort: SortSpec | None = None) -> list[Document]:
        """Найти все документы под фильтром.

        Args:
            query: Фильтр (None = все документы)
            sort: Список (field, 1 | -1)

        Returns:
            Материализованный список документов

        """
        ...

    async def find_one(self, query: Query) -> Document | None:
        """Найти первый документ под фильтром."""
        ...

    async def insert_one(self, document: Document) -> InsertResult:
        """Вставить документ, назначив _id если его нет."""
        ...

    async def update_one(self, query: Query, update: Update) -> UpdateResult:
        """Атомарно обновить первый документ под фильтром."""
        ...

    async def update_many(self, query: Query, update: Update) -> UpdateResult:
        """Атомарно обновить все документы под фильтром."""
        ...

    async def delete_one(self, query: Query) -> DeleteResult:
        """Удалить первый документ под фильтром."""
        ...


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol для store: набор именованных коллекций и одно подключение."""

    def collection(self, name: str) -> DocumentCollection:
        """Получить коллекцию по имени."""
        ...

    async def health_check(self) -> bool:
        """Проверить доступность store."""
        ...

    async def close(self) -> None:
        """Закрыть подключение. Вызывается при shutdown приложения."""
        ...
