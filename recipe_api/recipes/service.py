from typing import Any, Dict, Mapping, Optional

from recipe_api.framework.errors import InvalidInput, NotFound, ValidationFailed
from recipe_api.framework.logging import log_event
from recipe_api.framework.tracing import traced

from .entity import Recipe
from .repository import RecipeRepository

# largest value of the INT id column
MAX_RECIPE_ID = 2**31 - 1


def parse_recipe_id(value: Any) -> int:
    """
    Accepts a positive integer, or a string of decimal digits, that fits
    the id column.
    """
    if isinstance(value, bool):
        raise InvalidInput("Invalid recipe ID")
    if isinstance(value, int):
        recipe_id = value
    elif isinstance(value, str) and value.strip().isdecimal():
        recipe_id = int(value.strip())
    else:
        raise InvalidInput("Invalid recipe ID")

    if recipe_id <= 0 or recipe_id > MAX_RECIPE_ID:
        raise InvalidInput("Invalid recipe ID")
    return recipe_id


def envelope(message: str, data) -> Dict[str, Any]:
    return {"success": True, "message": message, "data": data}


class RecipeService:
    """
    Validates recipe input, applies the business rules and shapes the
    success envelope returned to the HTTP layer.

    Updates replace every field: a PUT that omits ``description`` clears it.
    """

    def __init__(self, repository: RecipeRepository):
        self.repository = repository

    @staticmethod
    def _validated(raw_input: Optional[Mapping[str, Any]]) -> Recipe:
        recipe = Recipe.from_dict(raw_input)
        errors = recipe.validate()
        if errors:
            raise ValidationFailed(errors)
        return recipe

    async def _existing(self, recipe_id: int) -> Recipe:
        recipe = await self.repository.find_by_id(recipe_id)
        if recipe is None:
            raise NotFound("Recipe not found")
        return recipe

    @traced
    async def list_all(self):
        recipes = await self.repository.find_all()
        return envelope(
            "Recipes retrieved successfully",
            [recipe.to_api_view() for recipe in recipes],
        )

    @traced
    async def get_by_id(self, recipe_id):
        recipe = await self._existing(parse_recipe_id(recipe_id))
        return envelope("Recipe retrieved successfully", recipe.to_api_view())

    @traced
    async def create(self, raw_input):
        recipe = self._validated(raw_input)
        created = await self.repository.create(recipe.to_storage_view())
        log_event("recipe_created", recipe_id=created.id, title=created.title)
        return envelope("Recipe created successfully", created.to_api_view())

    @traced
    async def update(self, recipe_id, raw_input):
        recipe_id = parse_recipe_id(recipe_id)
        await self._existing(recipe_id)

        recipe = self._validated(raw_input)
        updated = await self.repository.update(recipe_id, recipe.to_storage_view())
        if updated is None:
            # removed between the existence check and the write
            raise NotFound("Recipe not found")

        log_event("recipe_updated", recipe_id=recipe_id)
        return envelope("Recipe updated successfully", updated.to_api_view())

    @traced
    async def delete_by_id(self, recipe_id):
        recipe_id = parse_recipe_id(recipe_id)
        await self._existing(recipe_id)

        deleted = await self.repository.delete(recipe_id)
        if deleted is None:
            raise NotFound("Recipe not found")

        log_event("recipe_deleted", recipe_id=recipe_id)
        return envelope("Recipe deleted successfully", deleted.to_api_view())
