import importlib
import inspect
import logging

from fastapi import Body, Request

from recipe_api.framework.logging import Span, log_event


async def _run(handler_fn, args):
    """
    Helper to run a handler function, sync or async, inside a span.
    """
    with Span(handler_fn.__name__):
        res = handler_fn(*args)
        return await res if inspect.isawaitable(res) else res


def resolve_handler(handler_path: str):
    """
    Resolve a handler function from a string path, e.g. "recipe_api.recipes.controller.get_recipe".
    """
    module_name, func_name = handler_path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, func_name)


def build_body_handler(request_model, handler_fn, service):
    """
    Helper to build an endpoint for routes that expect a request body.
    FastAPI parses the body into ``request_model``; the handler is then
    called with the path params, the parsed body and the service.
    """

    async def endpoint(
        request: Request,
        data: request_model = Body(..., embed=False),
    ):
        log_event(
            "request_body",
            level=logging.DEBUG,
            method=request.method,
            path=request.url.path,
            body=data.model_dump(),
        )

        args = list(request.path_params.values())
        args.append(data)
        args.append(service)
        return await _run(handler_fn, args)

    return endpoint


def build_plain_handler(handler_fn, service):
    """
    Helper to build an endpoint for routes that do not expect a request body.
    """

    async def endpoint(request: Request):
        args = list(request.path_params.values())
        args.append(service)
        return await _run(handler_fn, args)

    return endpoint


def make_endpoint(route, handler_fn, service):
    """
    Helper to build an endpoint for a given route.
    """
    if route.request_model:
        endpoint = build_body_handler(route.request_model, handler_fn, service)
    else:
        endpoint = build_plain_handler(handler_fn, service)

    endpoint.__name__ = handler_fn.__name__
    return endpoint
