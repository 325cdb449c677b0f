"""Taskly - API Module.

HTTP и WebSocket роутеры task board.
"""

from src.api.routes import system, tasks, users, websocket

__all__ = ["system", "tasks", "users", "websocket"]
