from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_api.config import Config, get_config, get_config_for_service
from recipe_api.framework.errors import install_exception_handlers
from recipe_api.framework.helpers import make_endpoint, resolve_handler
from recipe_api.framework.logging import log_event
from recipe_api.framework.tracing import tracing_middleware
from recipe_api.shared.schemas.generic import ErrorResponse, HealthResponse

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_microservice(
    service_name: str, recipe_service, config: Optional[Config] = None
) -> FastAPI:
    """
    Build a FastAPI microservice dynamically from config.yaml.
    ``recipe_service`` is handed to every route handler.
    """
    config = config or get_config()
    service = get_config_for_service(service_name, config)

    app = FastAPI(
        title=service.title, version=service.version, openapi_url="/openapi.json"
    )

    router = APIRouter()

    # Register all routes listed under this service config
    for route in service.routes:
        handler_fn = resolve_handler(route.handler)
        endpoint = make_endpoint(route, handler_fn, recipe_service)

        router.add_api_route(
            route.path,
            endpoint,
            methods=[route.method.upper()],
            response_model=route.response_model,
            status_code=route.status_code,
            summary=route.description,
            tags=route.tags or [service.name],
            responses=ERROR_RESPONSES,
        )

        log_event(
            "startup",
            action="route_registration",
            service_name=service_name,
            method=route.method.upper(),
            path=f"{config.urlPrefix}{route.path}",
            handler=route.handler,
        )

    app.include_router(router, prefix=config.urlPrefix)
    install_exception_handlers(app)
    app.middleware("http")(tracing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.corsOrigins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
        expose_headers=["X-Trace-ID"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse()

    return app
