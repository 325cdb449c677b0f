"""Константы для Taskly.

Централизованное хранилище всех магических строк.
"""

# === Коллекции ===
USERS_COLLECTION = "users"
TASKS_COLLECTION = "tasks"

# === Поля документов ===
ID_FIELD = "_id"
CATEGORY_FIELD = "category"
INDEX_FIELD = "index"
CREATED_AT_FIELD = "createdAt"
EMAIL_FIELD = "email"

# Поля, которые нельзя менять через update
IMMUTABLE_TASK_FIELDS = frozenset({ID_FIELD, CREATED_AT_FIELD})

# === Realtime события ===
WELCOME_EVENT = "welcome"
TASK_UPDATED_EVENT = "task-updated"

# === Ответы API ===
SERVICE_BANNER = "✅ Taskly server is running.."
TASK_REORDERED_MESSAGE = "Task reordered successfully"
TASK_DELETED_MESSAGE = "Task deleted successfully"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"

# === Redis ===
REDIS_WATCH_MAX_RETRIES = 50
