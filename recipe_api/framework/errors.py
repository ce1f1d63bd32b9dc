"""
Recipe API exceptions.

Every failure the API reports is a RecipeError subclass, classified at the
point it is raised. The exception handlers below turn them (and framework or
database errors) into the JSON failure envelope.
"""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api.framework.logging import log_event
from recipe_api.shared.schemas.generic import ErrorResponse


class RecipeError(Exception):
    """
    Base exception for all recipe API errors.

    Attributes:
        code: Error code (INVALID_INPUT, VALIDATION_FAILED, ...)
        message: Human readable summary
        errors: Individual messages shown to the caller
    """

    code = "RECIPE_ERROR"
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = list(errors) if errors else [message]
        super().__init__(message)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {
            "success": False,
            "code": self.code,
            "message": self.message,
            "errors": self.errors,
        }


class InvalidInput(RecipeError):
    """Malformed identifier or structurally wrong payload."""

    code = "INVALID_INPUT"
    status_code = 400


class ValidationFailed(RecipeError):
    """One or more recipe rules were violated."""

    code = "VALIDATION_FAILED"
    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__(f"Validation errors: {', '.join(errors)}", errors)


class NotFound(RecipeError):
    code = "NOT_FOUND"
    status_code = 404


class StoreError(RecipeError):
    """Opaque failure coming from the database layer."""

    code = "STORE_ERROR"
    status_code = 500

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__("Failed to access recipe store", [cause.__class__.__name__])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_response(request: Request, error: RecipeError) -> JSONResponse:
    body = ErrorResponse(
        **error.as_dict(), timestamp=_timestamp(), path=request.url.path
    )
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


async def recipe_error_handler(request: Request, exc: RecipeError):
    log_event(
        "request_failed",
        code=exc.code,
        status=exc.status_code,
        path=request.url.path,
        message=exc.message,
    )
    return error_response(request, exc)


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    log_event("store_error", path=request.url.path, error=repr(exc))
    return error_response(request, StoreError(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = exc.errors()
    if any(d.get("type") == "json_invalid" for d in details):
        error = InvalidInput("Invalid JSON format")
    else:
        messages = [
            f"{'.'.join(str(p) for p in d.get('loc', ()) if p != 'body') or 'body'}: {d.get('msg')}"
            for d in details
        ]
        error = InvalidInput("Invalid request body", messages)
    return await recipe_error_handler(request, error)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    body = ErrorResponse(
        code="HTTP_ERROR",
        message=message,
        errors=[message],
        timestamp=_timestamp(),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    log_event("unhandled_error", path=request.url.path, error=repr(exc))
    error = RecipeError("Internal Server Error")
    return error_response(request, error)


def install_exception_handlers(app: FastAPI):
    """
    Register the handlers translating exceptions into failure envelopes.
    """
    app.add_exception_handler(RecipeError, recipe_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
