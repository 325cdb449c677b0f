"""Request Schemas для Taskly API.

Pydantic models для валидации входящих запросов. Проверяются только
поля идентичности и порядка, остальные поля задачи проходят как есть.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateTaskRequest(BaseModel):
    """Запрос на создание задачи.

    POST /tasks
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {"title": "Write docs", "category": "To-Do", "index": 0},
                {"title": "Ship it", "category": "Done", "description": "v1.0"},
            ]
        },
    )

    category: str = Field(min_length=1, description="Колонка доски")
    index: int | None = Field(
        default=None,
        ge=0,
        description="Позиция в колонке (без неё задача встаёт в конец)",
    )
    title: str | None = Field(default=None, description="Заголовок")


class ReorderTaskRequest(BaseModel):
    """Запрос на перемещение задачи (drag & drop).

    PUT /tasks/reorder/{id}

    Знак index и пустая category проверяются в Ordering Engine (400, не 422).
    """

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"category": "In Progress", "index": 2}]},
    )

    category: str = Field(description="Целевая колонка")
    index: int = Field(description="Целевая позиция")
