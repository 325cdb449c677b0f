"""Unit тесты для services/identity.py."""

import pytest

from src.services.identity import IdentityService
from src.storage import InsertResult, MemoryCollection


class TestIdentityService:
    """Тесты для IdentityService.upsert_user."""

    @pytest.mark.asyncio
    async def test_new_user_inserted(
        self, identity_service: IdentityService, users_collection: MemoryCollection
    ) -> None:
        """Новый пользователь сохраняется вместе с email."""
        result = await identity_service.upsert_user("ada@example.com", {"name": "Ada"})

        assert isinstance(result, InsertResult)
        stored = await users_collection.find_one({"email": "ada@example.com"})
        assert stored["name"] == "Ada"
        assert stored["_id"] == result.inserted_id

    @pytest.mark.asyncio
    async def test_existing_user_returned_unchanged(
        self, identity_service: IdentityService, users_collection: MemoryCollection
    ) -> None:
        """Повторный вызов возвращает сохранённый документ без merge."""
        await identity_service.upsert_user("ada@example.com", {"name": "Ada"})

        existing = await identity_service.upsert_user("ada@example.com", {"name": "Changed", "role": "admin"})

        assert existing["name"] == "Ada"
        assert "role" not in existing
        assert len(await users_collection.find({"email": "ada@example.com"})) == 1

    @pytest.mark.asyncio
    async def test_path_email_wins_over_profile(
        self, identity_service: IdentityService, users_collection: MemoryCollection
    ) -> None:
        """email из пути перекрывает email из профиля."""
        await identity_service.upsert_user("ada@example.com", {"email": "other@example.com"})

        assert await users_collection.find_one({"email": "ada@example.com"}) is not None
        assert await users_collection.find_one({"email": "other@example.com"}) is None
