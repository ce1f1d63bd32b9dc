import json
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.orm import sessionmaker

from recipe_api.framework.logging import Span
from recipe_api.shared.lib.db import session_scope

from .entity import Recipe
from .models import RecipeRow


def _encode_list(items) -> str:
    return json.dumps(list(items or []))


def _decode_list(value) -> List[Any]:
    # some drivers hand back JSON columns already parsed
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value) if value else []
    return list(value)


def row_to_recipe(row: RecipeRow) -> Recipe:
    return Recipe.from_dict(
        {
            "id": row.id,
            "title": row.title,
            "description": row.description,
            "ingredients": _decode_list(row.ingredients),
            "instructions": _decode_list(row.instructions),
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


class RecipeRepository:
    """
    Reads and writes recipes. The only component that talks to the database.

    Database errors are not caught here; they reach the caller unchanged.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def find_all(self) -> List[Recipe]:
        with Span("db_list_recipes"), session_scope(self.session_factory) as db:
            query = select(RecipeRow).order_by(
                desc(RecipeRow.created_at), desc(RecipeRow.id)
            )
            return [row_to_recipe(row) for row in db.scalars(query)]

    async def find_by_id(self, recipe_id: int) -> Optional[Recipe]:
        with Span("db_query_recipe"), session_scope(self.session_factory) as db:
            row = db.get(RecipeRow, recipe_id)
            return row_to_recipe(row) if row is not None else None

    async def create(self, data: Dict[str, Any]) -> Recipe:
        """
        Inserts a recipe and returns it as stored, including the id and
        timestamps assigned by the database.
        """
        with Span("db_create_recipe"), session_scope(self.session_factory) as db:
            row = RecipeRow(
                title=data["title"],
                description=data.get("description"),
                ingredients=_encode_list(data["ingredients"]),
                instructions=_encode_list(data["instructions"]),
            )
            db.add(row)
            db.flush()
            new_id = row.id

        return await self.find_by_id(new_id)

    async def update(self, recipe_id: int, data: Dict[str, Any]) -> Optional[Recipe]:
        with Span("db_update_recipe"), session_scope(self.session_factory) as db:
            db.execute(
                update(RecipeRow)
                .where(RecipeRow.id == recipe_id)
                .values(
                    title=data["title"],
                    description=data.get("description"),
                    ingredients=_encode_list(data["ingredients"]),
                    instructions=_encode_list(data["instructions"]),
                    updated_at=func.now(),
                )
                .execution_options(synchronize_session=False)
            )

        return await self.find_by_id(recipe_id)

    async def delete(self, recipe_id: int) -> Optional[Recipe]:
        """
        Deletes a recipe and returns what was stored, or None if there was
        nothing at that id.
        """
        recipe = await self.find_by_id(recipe_id)
        if recipe is None:
            return None

        with Span("db_delete_recipe"), session_scope(self.session_factory) as db:
            db.execute(
                delete(RecipeRow)
                .where(RecipeRow.id == recipe_id)
                .execution_options(synchronize_session=False)
            )

        return recipe
