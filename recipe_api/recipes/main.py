from typing import Optional

import uvicorn
from fastapi import FastAPI

from recipe_api.config import get_config, get_config_for_service
from recipe_api.framework.app import create_microservice
from recipe_api.recipes.db import init_db, make_engine, make_session_factory
from recipe_api.recipes.repository import RecipeRepository
from recipe_api.recipes.service import RecipeService

SERVICE_NAME = "recipes"


def build_recipe_service(db_url: str) -> RecipeService:
    """
    Wire the recipes stack: engine, session factory, repository, service.
    """
    engine = make_engine(db_url)
    init_db(engine)
    repository = RecipeRepository(make_session_factory(engine))
    return RecipeService(repository)


def create_app(db_url: Optional[str] = None) -> FastAPI:
    """
    Application factory. Dependencies are built once here and passed down.
    """
    config = get_config()
    service_config = get_config_for_service(SERVICE_NAME, config)
    recipe_service = build_recipe_service(db_url or service_config.db)
    return create_microservice(SERVICE_NAME, recipe_service, config)


def main():
    """Run the API server."""
    uvicorn.run(
        "recipe_api.recipes.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
