import functools
import time
import uuid

from recipe_api.framework.logging import Span, current_trace_id, log_span

TRACE_ID_HEADER = "X-Trace-ID"


def start_request_trace(request):
    """
    Bind the request's trace id to the current context.
    Clients may send their own id in X-Trace-ID; otherwise a LOCAL- id is made.
    """
    trace_id = request.headers.get(TRACE_ID_HEADER) or "LOCAL-" + str(uuid.uuid4())
    current_trace_id.set(trace_id)
    return trace_id


async def tracing_middleware(request, call_next):
    """
    Logs one "request" span per API call and echoes the trace id back
    in the response headers.
    """
    trace_id = start_request_trace(request)
    start = time.time()

    response = await call_next(request)

    log_span(
        "request",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.time() - start) * 1000, 2),
    )

    response.headers[TRACE_ID_HEADER] = trace_id
    return response


def traced(fn):
    """
    Runs a recipe service coroutine inside a span named after it.
    """

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        with Span(fn.__name__):
            return await fn(*args, **kwargs)

    return wrapper
