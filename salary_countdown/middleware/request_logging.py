"""Middleware that tags log records per request and logs API timings."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from salary_countdown.core.logger import bind_log_context, get_logger

LOGGER = get_logger("salary_countdown.http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log ``/api`` calls on completion."""

    def __init__(self, app, *, prefix: str = "/api", header: str = "X-Request-ID") -> None:
        super().__init__(app)
        self._prefix = prefix
        self._header = header

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(self._header) or uuid4().hex[:12]
        start = perf_counter()
        with bind_log_context(request_id=request_id):
            response = await call_next(request)
            duration_ms = (perf_counter() - start) * 1000
            if request.url.path.startswith(self._prefix):
                LOGGER.info(
                    "%s %s %s - %.0fms",
                    request.method,
                    request.url.path,
                    response.status_code,
                    duration_ms,
                )
        response.headers[self._header] = request_id
        return response


__all__ = ["RequestLoggingMiddleware"]
