"""Taskly - Core module.

Ядро приложения: константы, enum'ы, зависимости.
"""

from src.core.constants import TASK_UPDATED_EVENT, TASKS_COLLECTION, USERS_COLLECTION, WELCOME_EVENT
from src.core.enums import IndexPolicy, StoreBackend, TaskOperation

__all__ = [
    "TASK_UPDATED_EVENT",
    "TASKS_COLLECTION",
    "USERS_COLLECTION",
    "WELCOME_EVENT",
    "IndexPolicy",
    "StoreBackend",
    "TaskOperation",
]
