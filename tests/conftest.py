from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from recipe_api.recipes.entity import Recipe
from recipe_api.recipes.main import build_recipe_service, create_app
from recipe_api.recipes.service import RecipeService

IN_MEMORY_DB = "sqlite://"


class InMemoryRecipeRepository:
    """Substitute store used for service tests. Records every call."""

    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self.calls: list[str] = []
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def find_all(self):
        self.calls.append("find_all")
        rows = sorted(self.rows.values(), key=lambda row: row["created_at"], reverse=True)
        return [Recipe.from_dict(row) for row in rows]

    async def find_by_id(self, recipe_id):
        self.calls.append("find_by_id")
        row = self.rows.get(recipe_id)
        return Recipe.from_dict(row) if row else None

    async def create(self, data):
        self.calls.append("create")
        now = self._tick()
        row = {**data, "id": self._next_id, "created_at": now, "updated_at": now}
        self.rows[self._next_id] = row
        self._next_id += 1
        return Recipe.from_dict(row)

    async def update(self, recipe_id, data):
        self.calls.append("update")
        row = self.rows.get(recipe_id)
        if row is None:
            return None
        row.update(
            title=data["title"],
            description=data.get("description"),
            ingredients=data["ingredients"],
            instructions=data["instructions"],
            updated_at=self._tick(),
        )
        return Recipe.from_dict(row)

    async def delete(self, recipe_id):
        self.calls.append("delete")
        row = self.rows.pop(recipe_id, None)
        return Recipe.from_dict(row) if row else None


@pytest.fixture
def memory_repository():
    return InMemoryRecipeRepository()


@pytest.fixture
def memory_service(memory_repository):
    return RecipeService(memory_repository)


@pytest.fixture
def db_service():
    return build_recipe_service(IN_MEMORY_DB)


@pytest.fixture
def client():
    with TestClient(create_app(IN_MEMORY_DB)) as test_client:
        yield test_client


@pytest.fixture
def nasi_goreng():
    return {
        "title": "Nasi Goreng",
        "ingredients": ["rice", "egg"],
        "instructions": ["fry", "serve"],
    }
