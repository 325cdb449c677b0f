"""Error handling decorators.

Декораторы для обработки ошибок на границе store.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from src.shared.errors.base import AppException
from src.shared.errors.domain_errors import StoreFailureError

T = TypeVar("T")


def store_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Декоратор для методов document store.

    Перехватывает технические исключения backend'а (Redis, таймауты)
    и преобразует их в StoreFailureError. Доменные исключения
    пробрасываются как есть.

    Args:
        func: Асинхронный метод store.

    Returns:
        Обернутая функция.

    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except AppException:
            raise
        except Exception as e:
            logger.exception(
                f"Store error in {func.__name__}",
                operation=func.__name__,
                exception_type=type(e).__name__,
                exception_message=str(e),
            )
            raise StoreFailureError() from e

    return wrapper
