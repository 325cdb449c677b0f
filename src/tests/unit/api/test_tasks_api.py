"""Unit тесты для Tasks API."""

import pytest
from httpx import AsyncClient

from src.shared.utils import new_object_id


async def _create(client: AsyncClient, **fields: object) -> str:
    response = await client.post("/tasks", json=fields)
    assert response.status_code == 200
    return response.json()["insertedId"]


class TestListTasks:
    """Тесты для GET /tasks."""

    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient) -> None:
        """Пустая доска - пустой список."""
        response = await client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_sorted_by_index(self, client: AsyncClient) -> None:
        """Задачи по возрастанию index."""
        await _create(client, title="b", category="todo", index=1)
        await _create(client, title="a", category="done", index=0)

        response = await client.get("/tasks")

        assert [task["title"] for task in response.json()] == ["a", "b"]


class TestCreateTask:
    """Тесты для POST /tasks."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient) -> None:
        """Ответ - подтверждение вставки, документ в списке с createdAt."""
        response = await client.post("/tasks", json={"title": "Write docs", "category": "todo", "index": 0})

        assert response.status_code == 200
        body = response.json()
        assert body["acknowledged"] is True
        assert len(body["insertedId"]) == 24

        [task] = (await client.get("/tasks")).json()
        assert task["_id"] == body["insertedId"]
        assert task["title"] == "Write docs"
        assert task["createdAt"]

    @pytest.mark.asyncio
    async def test_extra_fields_preserved(self, client: AsyncClient) -> None:
        """Произвольные поля задачи сохраняются."""
        await _create(client, category="todo", index=0, priority="high", tags=["ui"])

        [task] = (await client.get("/tasks")).json()
        assert task["priority"] == "high"
        assert task["tags"] == ["ui"]

    @pytest.mark.asyncio
    async def test_missing_category(self, client: AsyncClient) -> None:
        """Без category - 422."""
        response = await client.post("/tasks", json={"title": "x"})

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_negative_index(self, client: AsyncClient) -> None:
        """Отрицательный index - 422."""
        response = await client.post("/tasks", json={"category": "todo", "index": -1})
        assert response.status_code == 422


class TestUpdateTask:
    """Тесты для PUT /tasks/{id}."""

    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient) -> None:
        """Ответ - полный обновлённый документ."""
        task_id = await _create(client, title="Old", description="keep", category="todo", index=0)

        response = await client.put(f"/tasks/{task_id}", json={"title": "New"})

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == task_id
        assert body["title"] == "New"
        assert body["description"] == "keep"

    @pytest.mark.asyncio
    async def test_missing_task(self, client: AsyncClient) -> None:
        """Несуществующий id - 404, а не 500."""
        response = await client.put(f"/tasks/{new_object_id()}", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["message"] == "Task not found"

    @pytest.mark.asyncio
    async def test_noop_patch(self, client: AsyncClient) -> None:
        """Patch без изменений - 404."""
        task_id = await _create(client, title="Same", category="todo", index=0)

        response = await client.put(f"/tasks/{task_id}", json={"title": "Same"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_id(self, client: AsyncClient) -> None:
        """Невалидный id - 400."""
        response = await client.put("/tasks/not-an-id", json={"title": "x"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_TASK_ID"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("patch", "message"),
        [({"index": "abc"}, "Invalid index"), ({"index": -1}, "Invalid index"), ({"category": ""}, "Invalid category")],
    )
    async def test_invalid_ordering_fields(self, client: AsyncClient, patch: dict, message: str) -> None:
        """Некорректные category или index - 400, GET /tasks продолжает работать."""
        task_id = await _create(client, title="A", category="todo", index=0)
        await _create(client, title="B", category="todo", index=1)

        response = await client.put(f"/tasks/{task_id}", json=patch)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_POSITION"
        assert response.json()["message"] == message

        listing = await client.get("/tasks")
        assert listing.status_code == 200
        assert [task["index"] for task in listing.json()] == [0, 1]


class TestReorderTask:
    """Тесты для PUT /tasks/reorder/{id}."""

    @pytest.mark.asyncio
    async def test_reorder(self, client: AsyncClient) -> None:
        """Перемещение на занятую позицию сдвигает её владельца."""
        first = await _create(client, title="A", category="todo", index=0)
        moved = await _create(client, title="B", category="doing", index=0)

        response = await client.put(f"/tasks/reorder/{moved}", json={"category": "todo", "index": 0})

        assert response.status_code == 200
        assert response.json() == {"message": "Task reordered successfully"}
        positions = {task["_id"]: (task["category"], task["index"]) for task in (await client.get("/tasks")).json()}
        assert positions == {moved: ("todo", 0), first: ("todo", 1)}

    @pytest.mark.asyncio
    async def test_reorder_missing_task(self, client: AsyncClient) -> None:
        """Несуществующая задача - 404."""
        response = await client.put(f"/tasks/reorder/{new_object_id()}", json={"category": "todo", "index": 0})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_reorder_invalid_id(self, client: AsyncClient) -> None:
        """Невалидный id - 400."""
        response = await client.put("/tasks/reorder/123", json={"category": "todo", "index": 0})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_reorder_negative_index(self, client: AsyncClient) -> None:
        """Отрицательный index - 400."""
        task_id = await _create(client, category="todo", index=0)

        response = await client.put(f"/tasks/reorder/{task_id}", json={"category": "todo", "index": -1})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid index"


class TestDeleteTask:
    """Тесты для DELETE /tasks/{id}."""

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient) -> None:
        """Удалённая задача пропадает из списка."""
        task_id = await _create(client, category="todo", index=0)

        response = await client.delete(f"/tasks/{task_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted successfully"}
        assert (await client.get("/tasks")).json() == []

    @pytest.mark.asyncio
    async def test_delete_missing(self, client: AsyncClient) -> None:
        """Повторное удаление - 404."""
        response = await client.delete(f"/tasks/{new_object_id()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_invalid_id(self, client: AsyncClient) -> None:
        """Невалидный id - 400."""
        response = await client.delete("/tasks/xyz")
        assert response.status_code == 400
