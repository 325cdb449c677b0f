"""Identity Service.

Идемпотентный upsert пользователя по email при каждом логине.
"""

from typing import Any

from src.core.constants import EMAIL_FIELD
from src.shared.logging import get_logger
from src.storage import Document, DocumentCollection, InsertResult

logger = get_logger(__name__)


class IdentityService:
    """Пользователи, ключ - уникальный email."""

    def __init__(self, users: DocumentCollection) -> None:
        self.users = users

    async def upsert_user(self, email: str, profile: dict[str, Any]) -> Document | InsertResult:
        """Вернуть существующего пользователя или создать нового.

        Существующая запись возвращается как есть, без merge профиля.

        Args:
            email: Ключ пользователя
            profile: Профиль из тела запроса

        Returns:
            Сохранённый документ или подтверждение вставки

        """
        existing = await self.users.find_one({EMAIL_FIELD: email})
        if existing is not None:
            logger.debug("Пользователь уже существует", email=email)
            return existing

        document = {**profile, EMAIL_FIELD: email}
        result = await self.users.insert_one(document)
        logger.info("Пользователь создан", email=email, user_id=result.inserted_id)
        return result
