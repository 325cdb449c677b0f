"""Domain errors.

Доменные исключения task board. Сообщения видны клиенту, поэтому
на английском и без внутренних деталей.
"""

from typing import Any

from src.shared.errors.base import AppException


class InvalidArgumentError(AppException):
    """Invalid argument"""

    status_code = 400
    code = "INVALID_ARGUMENT"


class InvalidTaskIdError(InvalidArgumentError):
    """Invalid task ID"""

    code = "INVALID_TASK_ID"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Отклонённый идентификатор.

        """
        super().__init__(details={"task_id": task_id})


class InvalidPositionError(InvalidArgumentError):
    """Invalid target position"""

    code = "INVALID_POSITION"

    def __init__(self, field: str, value: Any) -> None:
        """Инициализация исключения.

        Args:
            field: Поле (category или index).
            value: Отклонённое значение.

        """
        super().__init__(
            message=f"Invalid {field}",
            details={"field": field, "value": value},
        )


class NotFoundError(AppException):
    """Resource not found"""

    status_code = 404
    code = "NOT_FOUND"


class TaskNotFoundError(NotFoundError):
    """Task not found"""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.

        """
        super().__init__(details={"task_id": task_id})


class StoreFailureError(AppException):
    """Internal Server Error

    Технические детали пишутся в лог, в ответ уходит только общее сообщение.
    """

    status_code = 500
    code = "STORE_FAILURE"


class StoreUnavailableError(AppException):
    """Store unavailable"""

    status_code = 503
    code = "STORE_UNAVAILABLE"
