"""Taskly API routers."""

from src.api.routes import system, tasks, users, websocket

__all__ = ["system", "tasks", "users", "websocket"]
