from sqlalchemy import Column, DateTime, Integer, String, Text, func

from recipe_api.recipes.db import Base
from recipe_api.recipes.entity import MAX_TITLE_LENGTH


class RecipeRow(Base):
    """
    A stored recipe. List fields hold JSON encoded arrays.
    """

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(String(MAX_TITLE_LENGTH), nullable=False)
    description = Column(Text)

    # JSON text, e.g. '["2 eggs", "rice"]'
    ingredients = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
