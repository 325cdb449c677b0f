"""Response Schemas для Taskly API."""

from pydantic import BaseModel, Field

from src.storage import InsertResult


class MessageResponse(BaseModel):
    """Подтверждение операции."""

    message: str = Field(description="Результат операции")


class HealthResponse(BaseModel):
    """Статус сервиса."""

    status: str = Field(description="ok | unavailable")
    store: str = Field(description="Статус document store")
    observers: int = Field(description="Подключённые WebSocket observers")


__all__ = ["HealthResponse", "InsertResult", "MessageResponse"]
