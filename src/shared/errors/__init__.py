"""Shared errors module.

Система обработки ошибок приложения.
"""

from src.shared.errors.base import AppException
from src.shared.errors.context import get_trace_id, set_trace_id, trace_id_var
from src.shared.errors.decorators import store_errors
from src.shared.errors.domain_errors import (
    InvalidArgumentError,
    InvalidPositionError,
    InvalidTaskIdError,
    NotFoundError,
    StoreFailureError,
    StoreUnavailableError,
    TaskNotFoundError,
)
from src.shared.errors.handlers import setup_exception_handlers
from src.shared.errors.schemas import ErrorDetail, ErrorResponse

__all__ = [
    # Base
    "AppException",
    # Context
    "trace_id_var",
    "get_trace_id",
    "set_trace_id",
    # Domain errors
    "InvalidArgumentError",
    "InvalidPositionError",
    "InvalidTaskIdError",
    "NotFoundError",
    "TaskNotFoundError",
    "StoreFailureError",
    "StoreUnavailableError",
    # Handlers
    "setup_exception_handlers",
    # Schemas
    "ErrorDetail",
    "ErrorResponse",
    # Decorators
    "store_errors",
]
