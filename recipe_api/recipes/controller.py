"""
HTTP handlers for the recipes service.

Handlers are registered from config.yaml. Each receives the path
parameters first, then the parsed body (if the route has one), then the
RecipeService the app was built with.
"""

from recipe_api.shared.schemas import recipe as rs

from .service import RecipeService


async def list_recipes(service: RecipeService) -> rs.RecipeListEnvelope:
    result = await service.list_all()
    return rs.RecipeListEnvelope(**result)


async def get_recipe(recipe_id: str, service: RecipeService) -> rs.RecipeEnvelope:
    result = await service.get_by_id(recipe_id)
    return rs.RecipeEnvelope(**result)


async def create_recipe(
    data: rs.RecipePayload, service: RecipeService
) -> rs.RecipeEnvelope:
    result = await service.create(data.model_dump())
    return rs.RecipeEnvelope(**result)


async def update_recipe(
    recipe_id: str, data: rs.RecipePayload, service: RecipeService
) -> rs.RecipeEnvelope:
    result = await service.update(recipe_id, data.model_dump())
    return rs.RecipeEnvelope(**result)


async def delete_recipe(recipe_id: str, service: RecipeService) -> rs.RecipeEnvelope:
    result = await service.delete_by_id(recipe_id)
    return rs.RecipeEnvelope(**result)
