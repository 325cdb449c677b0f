"""Notification Hub.

Реестр подключённых observers (WebSocket) и рассылка событий всем сразу.

Формат сообщения:
    {"type": "<event>", "timestamp": <unix time>, "data": <payload>}

Рассылка best-effort: без подтверждений, повторов и фильтрации.
Пропущенные события не хранятся - клиент после переподключения
восстанавливает состояние полным GET /tasks.
"""

import asyncio
import time
import uuid
from typing import Any

import orjson
from fastapi import WebSocket
from starlette.websockets import WebSocketState

from src.core.constants import WELCOME_EVENT
from src.shared.logging import get_logger

logger = get_logger(__name__)


def encode_event(event: str, payload: Any) -> str:
    """Сериализовать событие в JSON строку.

    Args:
        event: Тип события
        payload: Данные (документ, dict или строка)

    Returns:
        JSON строка
    """
    return orjson.dumps(
        {"type": event, "timestamp": time.time(), "data": payload},
        default=str,
    ).decode("utf-8")


class NotificationHub:
    """Менеджер WebSocket соединений.

    Набор соединений изменяется при connect/disconnect и читается при
    рассылке конкурентно, поэтому все обращения идут через asyncio.Lock.
    Сама коллекция наружу не отдаётся.
    """

    def __init__(self, welcome_message: str) -> None:
        """Инициализировать hub.

        Args:
            welcome_message: Приветствие, отправляемое один раз при подключении
        """
        self.welcome_message = welcome_message
        self._connections: dict[str, WebSocket] = {}
        self._lock = asyncio.Lock()

    async def register(self, websocket: WebSocket) -> str:
        """Принять соединение, отправить welcome и добавить в рассылку.

        Args:
            websocket: WebSocket соединение

        Returns:
            ID соединения
        """
        connection_id = str(uuid.uuid4())
        await websocket.accept()
        await websocket.send_text(encode_event(WELCOME_EVENT, self.welcome_message))

        async with self._lock:
            self._connections[connection_id] = websocket

        logger.info("Observer подключен", connection_id=connection_id)
        return connection_id

    async def unregister(self, connection_id: str) -> None:
        """Убрать соединение из рассылки.

        Args:
            connection_id: ID соединения
        """
        async with self._lock:
            removed = self._connections.pop(connection_id, None)

        if removed is not None:
            logger.info("Observer отключен", connection_id=connection_id)

    async def broadcast_all(self, event: str, payload: Any) -> int:
        """Разослать событие всем зарегистрированным observers.

        Args:
            event: Тип события
            payload: Данные события

        Returns:
            Количество observers, которым сообщение ушло
        """
        message = encode_event(event, payload)

        async with self._lock:
            targets = list(self._connections.items())

        delivered = 0
        failed: list[str] = []
        for connection_id, websocket in targets:
            try:
                if websocket.client_state == WebSocketState.CONNECTED:
                    await websocket.send_text(message)
                    delivered += 1
            except Exception as e:
                logger.warning(
                    "Ошибка отправки WebSocket сообщения",
                    connection_id=connection_id,
                    error=str(e),
                )
                failed.append(connection_id)

        if failed:
            async with self._lock:
                for connection_id in failed:
                    self._connections.pop(connection_id, None)

        logger.debug("Событие разослано", event_type=event, delivered=delivered, dropped=len(failed))
        return delivered

    @property
    def connection_count(self) -> int:
        """Количество активных соединений."""
        return len(self._connections)
