"""Users API Routes для Taskly.

Upsert пользователя при логине.
"""

from typing import Any

from fastapi import APIRouter, Body

from src.core.dependencies import IdentityServiceDep
from src.shared.errors import StoreFailureError
from src.storage import Document, InsertResult

router = APIRouter(prefix="/user", tags=["users"])


@router.post(
    "/{email}",
    summary="Сохранить пользователя",
    description="Возвращает существующего пользователя или создаёт нового",
    responses={500: StoreFailureError.openapi_response()},
)
async def upsert_user(
    email: str,
    service: IdentityServiceDep,
    profile: dict[str, Any] = Body(default_factory=dict),
) -> Document | InsertResult:
    """Идемпотентный upsert по email."""
    return await service.upsert_user(email, profile)
