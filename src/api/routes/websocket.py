"""WebSocket API Routes для Taskly.

Real-time канал: welcome при подключении, затем task-updated на каждую
мутацию. Сообщения от клиента читаются и игнорируются.
"""

from fastapi import APIRouter, WebSocket

from src.core.dependencies import NotificationHubDep
from src.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, hub: NotificationHubDep) -> None:
    """WebSocket endpoint для observers.

    Args:
        websocket: WebSocket соединение
        hub: Notification Hub
    """
    connection_id = await hub.register(websocket)
    try:
        # Текстовые и бинарные кадры клиента игнорируются
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("WebSocket disconnect", connection_id=connection_id, code=message.get("code"))
                break
    finally:
        await hub.unregister(connection_id)
