"""Модуль структурированного логирования.

Основное использование:
    >>> from src.shared.logging import setup_logging, get_logger
    >>> setup_logging()  # Вызвать один раз при старте
    >>> logger = get_logger(__name__)
    >>> logger.info("Task created", task_id=task_id)  # trace_id добавится автоматически
"""

from src.shared.logging.config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    setup_logging,
    trace_id_patcher,
)
from src.shared.logging.formatters import json_formatter, sanitize_sensitive_data

__all__ = [
    "InterceptHandler",
    "configure_third_party_loggers",
    "get_logger",
    "json_formatter",
    "sanitize_sensitive_data",
    "setup_logging",
    "trace_id_patcher",
]
