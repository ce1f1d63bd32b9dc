from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HealthResponse(BaseModel):
    """
    Response of the health check
    """

    success: bool = True
    message: str = "Recipe API is running!"
    timestamp: str = Field(default_factory=_now)


class ErrorResponse(BaseModel):
    """
    A generic failure envelope
    """

    success: bool = False
    code: str
    message: str
    errors: List[str]
    timestamp: str
    path: str
