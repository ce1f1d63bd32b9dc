import json
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecipePayload(BaseModel):
    """
    Model for the body of create and update requests.

    Only the shape is checked here; recipe rules are applied by the
    service so that every violation is reported at once.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, examples=["Nasi Goreng"])
    description: Optional[str] = None
    ingredients: Any = Field(None, examples=[["rice", "egg"]])
    instructions: Any = Field(None, examples=[["fry", "serve"]])

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def decode_json_array(cls, value):
        """
        Form posts and some clients send arrays as JSON encoded strings.
        """
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value


class RecipeOut(BaseModel):
    """
    Model for outputting a recipe.
    """

    id: int
    title: str
    description: Optional[str]
    ingredients: List[str]
    instructions: List[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class RecipeEnvelope(BaseModel):
    success: bool = True
    message: str
    data: RecipeOut
    timestamp: str = Field(default_factory=_now)


class RecipeListEnvelope(BaseModel):
    """
    Model for listing recipes.
    """

    success: bool = True
    message: str
    data: List[RecipeOut]
    timestamp: str = Field(default_factory=_now)
