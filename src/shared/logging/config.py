"""Logging configuration.

Настройка логирования через Loguru:
- Loguru для собственных логов приложения
- Перехват логов сторонних библиотек (uvicorn, fastapi, redis) в Loguru
- trace_id текущего запроса в каждой записи
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from config.settings import settings
from src.shared.errors.context import trace_id_var
from src.shared.logging.formatters import DEV_FORMAT, json_formatter

if TYPE_CHECKING:
    from loguru import Logger


class InterceptHandler(logging.Handler):
    """Обработчик для перехвата логов стандартной библиотеки logging."""

    def emit(self, record: logging.LogRecord) -> None:
        """Перехват и отправка логов в Loguru.

        Args:
            record: Запись лога из стандартного logging.

        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_patcher(record: Any) -> None:
    """Добавить trace_id в запись лога.

    Args:
        record: Запись лога.

    """
    record["extra"].setdefault("trace_id", trace_id_var.get() or "no-trace")


def setup_logging() -> None:
    """Настроить Loguru для всего приложения.

    - development: human-readable вывод в stdout с цветами
    - staging/production: JSON в stdout
    """
    logger.remove()
    logger.configure(patcher=trace_id_patcher)

    if settings.app_env == "development":
        logger.add(
            sys.stdout,
            format=DEV_FORMAT,
            level=settings.log_level,
            colorize=True,
            backtrace=True,
            diagnose=settings.debug,
        )
    else:
        logger.add(
            sys.stdout,
            format=json_formatter,
            level=settings.log_level,
            colorize=False,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    configure_third_party_loggers()

    logger.info("Logger initialized", level=settings.log_level, env=settings.app_env)


def configure_third_party_loggers() -> None:
    """Настроить логирование сторонних библиотек."""
    loggers_to_intercept = [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastapi",
        "redis",
    ]

    for logger_name in loggers_to_intercept:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logging.getLogger("uvicorn.access").setLevel(
        logging.WARNING if settings.app_env == "production" else logging.INFO
    )


def get_logger(name: str | None = None) -> "Logger":
    """Получить настроенный logger instance.

    Args:
        name: Имя логгера (обычно __name__ модуля)

    Returns:
        Loguru logger с привязанным именем
    """
    if name:
        return logger.bind(name=name)
    return logger
