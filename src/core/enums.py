"""Enums для Taskly.

Централизованное хранилище всех enum'ов проекта.
"""

from enum import Enum


class StoreBackend(str, Enum):
    """Реализация document store."""

    REDIS = "redis"
    MEMORY = "memory"  # Только для разработки и тестов


class IndexPolicy(str, Enum):
    """Откуда берётся index новой задачи."""

    CALLER_SPECIFIED = "caller-specified"
    APPEND_AT_END = "append-at-end"


class TaskOperation(str, Enum):
    """Мутация, породившая событие task-updated."""

    CREATED = "created"
    UPDATED = "updated"
    REORDERED = "reordered"
    DELETED = "deleted"


class HealthStatus(str, Enum):
    """Статус здоровья сервиса."""

    OK = "ok"
    UNAVAILABLE = "unavailable"
