"""Вычисление фильтров и обновлений в стиле MongoDB.

Общая логика для всех backend'ов, которые хранят документы целиком
и фильтруют их на стороне приложения.
"""

import copy
import operator
from collections.abc import Callable, Iterable
from typing import Any

from src.storage.base import Document, Query, SortSpec, Update

_MISSING = object()

_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def _match_condition(value: Any, condition: Any) -> bool:
    if not (isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition)):
        return value is not _MISSING and value == condition

    for op, expected in condition.items():
        if op == "$eq":
            if value is _MISSING or value != expected:
                return False
        elif op == "$ne":
            if value is not _MISSING and value == expected:
                return False
        elif op == "$in":
            if value is _MISSING or value not in expected:
                return False
        elif op in _COMPARISONS:
            if value is _MISSING or value is None:
                return False
            try:
                if not _COMPARISONS[op](value, expected):
                    return False
            except TypeError:
                return False
        else:
            msg = f"Unsupported query operator: {op}"
            raise ValueError(msg)
    return True


def matches(document: Document, query: Query | None) -> bool:
    """Проверить, что документ подходит под фильтр.

    Args:
        document: Документ
        query: Фильтр (None или {} - подходит любой)

    Returns:
        True если все условия выполнены
    """
    if not query:
        return True
    return all(_match_condition(document.get(field, _MISSING), cond) for field, cond in query.items())


def apply_update(document: Document, update: Update) -> Document:
    """Применить $set / $inc к копии документа.

    Args:
        document: Исходный документ (не изменяется)
        update: Операторы обновления

    Returns:
        Новый документ

    Raises:
        ValueError: Неизвестный оператор или нечисловой $inc
    """
    result = copy.deepcopy(document)
    for op, fields in update.items():
        if op == "$set":
            for field, value in fields.items():
                result[field] = copy.deepcopy(value)
        elif op == "$inc":
            for field, amount in fields.items():
                current = result.get(field, 0)
                if not isinstance(current, (int, float)) or isinstance(current, bool):
                    msg = f"Cannot apply $inc to non-numeric field '{field}'"
                    raise ValueError(msg)
                result[field] = current + amount
        else:
            msg = f"Unsupported update operator: {op}"
            raise ValueError(msg)
    return result


def _sort_key(field: str) -> Callable[[Document], tuple[int, Any]]:
    # Отсутствующие и null значения идут первыми, как в MongoDB
    def key(document: Document) -> tuple[int, Any]:
        value = document.get(field)
        return (0, 0) if value is None else (1, value)

    return key


def sort_documents(documents: Iterable[Document], sort: SortSpec | None) -> list[Document]:
    """Отсортировать документы по нескольким ключам.

    Args:
        documents: Документы
        sort: Список (field, 1 | -1); первый ключ - главный

    Returns:
        Отсортированный список
    """
    result = list(documents)
    for field, direction in reversed(sort or []):
        result.sort(key=_sort_key(field), reverse=direction < 0)
    return result
