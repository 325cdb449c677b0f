"""API schemas."""

from src.api.schemas.requests import CreateTaskRequest, ReorderTaskRequest
from src.api.schemas.responses import HealthResponse, InsertResult, MessageResponse

__all__ = [
    "CreateTaskRequest",
    "HealthResponse",
    "InsertResult",
    "MessageResponse",
    "ReorderTaskRequest",
]
