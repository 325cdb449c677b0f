"""AppException - корень иерархии ошибок task board.

Подкласс задаёт только status_code и docstring:
    class TaskNotFoundError(NotFoundError):
        \"\"\"Task not found\"\"\"

code выводится из имени класса (TASK_NOT_FOUND), сообщение по умолчанию -
первая строка docstring. Сообщение уходит клиенту как есть.
"""

import re
from typing import Any, ClassVar

from src.shared.errors.context import get_trace_id
from src.shared.errors.schemas import ErrorDetail, ErrorResponse

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def error_code_for(class_name: str) -> str:
    """TaskNotFoundError -> TASK_NOT_FOUND.

    Суффикс Error/Exception отбрасывается, если после него что-то остаётся.
    """
    stem = class_name
    for suffix in ("Exception", "Error"):
        if stem.endswith(suffix) and stem != suffix:
            stem = stem.removesuffix(suffix)
            break
    return _CAMEL_BOUNDARY.sub("_", stem).upper()


class AppException(Exception):
    """Internal Server Error"""

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "INTERNAL_ERROR"
    default_message: ClassVar[str] = "Internal Server Error"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "code" not in vars(cls):
            cls.code = error_code_for(cls.__name__)
        if "default_message" not in vars(cls) and cls.__doc__:
            cls.default_message = cls.__doc__.strip().splitlines()[0]

    def __init__(self, message: str | None = None, *, details: dict[str, Any] | None = None) -> None:
        """Создать ошибку.

        Args:
            message: Текст для клиента (по умолчанию - из docstring)
            details: Поля ErrorDetail (field, task_id, value, context)

        Raises:
            pydantic.ValidationError: details не укладываются в ErrorDetail

        """
        self.message = message or self.default_message
        self.details = ErrorDetail(**details).model_dump(exclude_none=True) if details else {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Тело ответа с trace_id текущего запроса."""
        return ErrorResponse(
            error=self.code,
            message=self.message,
            details=self.details,
            trace_id=get_trace_id(),
        )

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """Описание ответа для `responses=` в декораторах роутов."""
        example = ErrorResponse(error=cls.code, message=cls.default_message, trace_id="example-trace-id")
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {"application/json": {"example": example.model_dump()}},
        }
