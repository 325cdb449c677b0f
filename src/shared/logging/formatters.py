"""Форматтеры логов для Loguru.

- JSON формат для production (structured logging с trace_id)
- Human-readable формат для development
- Маскирование чувствительных полей
"""

from typing import Any

import orjson

SENSITIVE_KEYS = frozenset({"password", "pwd", "token", "secret", "api_key", "access_token", "authorization"})

DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<yellow>{extra[trace_id]}</yellow> - "
    "<level>{message}</level>"
)


def sanitize_sensitive_data(data: dict[str, Any]) -> dict[str, Any]:
    """Замаскировать значения чувствительных ключей.

    Args:
        data: Словарь extra полей лога

    Returns:
        Копия словаря с '***' вместо секретов
    """
    return {key: "***" if key.lower() in SENSITIVE_KEYS else value for key, value in data.items()}


def json_formatter(record: dict[str, Any]) -> str:
    """JSON форматтер для production structured logging.

    Loguru интерпретирует строку, возвращённую форматтером, как шаблон,
    поэтому готовый JSON кладётся в extra и подставляется через {extra[serialized]}.

    Args:
        record: Loguru record dictionary

    Returns:
        Шаблон строки лога
    """
    extra = dict(record["extra"])
    extra.pop("serialized", None)

    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
        **sanitize_sensitive_data(extra),
    }

    if record["exception"] is not None:
        exception_info = record["exception"]
        log_entry["exception"] = {
            "type": exception_info.type.__name__ if exception_info.type else None,
            "value": str(exception_info.value) if exception_info.value else None,
        }

    record["extra"]["serialized"] = orjson.dumps(log_entry, default=str).decode("utf-8")
    return "{extra[serialized]}\n"
