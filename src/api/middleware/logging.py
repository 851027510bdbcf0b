"""Request logging middleware."""

import time
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


def route_template(request: Request) -> str:
    """The matched route's path template, e.g. ``/api/posts/{post_id}``.

    Falls back to the raw path when no route matched.
    """
    route = request.scope.get("route")
    return getattr(route, "path_format", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request, keyed by route template rather than raw path."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=getattr(request.state, "request_id", "unknown"),
            method=request.method,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                route=route_template(request),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        status_code = response.status_code
        if status_code >= 500:
            log = logger.error
        elif status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "request_completed",
            route=route_template(request),
            status_code=status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return response
