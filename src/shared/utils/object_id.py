"""Идентификаторы документов.

Формат совместим с MongoDB ObjectId: 12 байт в виде 24 hex-символов
(4 байта unix time, 5 байт случайного префикса процесса, 3 байта счётчика).
"""

import itertools
import os
import re
import threading
import time

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

_process_random = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def new_object_id() -> str:
    """Сгенерировать новый идентификатор.

    Returns:
        24 hex-символа в нижнем регистре
    """
    with _counter_lock:
        count = next(_counter) & 0xFFFFFF
    timestamp = int(time.time()) & 0xFFFFFFFF
    raw = timestamp.to_bytes(4, "big") + _process_random + count.to_bytes(3, "big")
    return raw.hex()


def is_valid_object_id(value: object) -> bool:
    """Проверить, что значение - корректный идентификатор.

    Args:
        value: Проверяемое значение

    Returns:
        True для строки из ровно 24 hex-символов
    """
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None
