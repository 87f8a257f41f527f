"""
Rentomatic Backend - Request Logging Middleware
================================================

What:  One access-log line per HTTP request, with status and duration.
Why:   gunicorn/uvicorn access logs carry no request ID; this one does, so a
       500 from GET /rooms can be matched with the use case's error log.
When:  Runs inside RequestIDMiddleware (uses the request ID it sets).

Line format:
    GET /rooms?filter_price_min=40 200 3.1ms [a1b2c3d4] from 10.0.0.2

Level by status:
    5xx → ERROR, 4xx → WARNING, otherwise INFO
    A request whose handler raised is logged as 500.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from rentomatic.middleware.request_id import request_id_var

logger = logging.getLogger("rentomatic.access")

# Probed every few seconds by Docker and Nginx
QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, target (path and query), status, duration, request ID and client IP."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            self._log(request, status, (time.perf_counter() - started) * 1000)

    @staticmethod
    def _log(request: Request, status: int, duration_ms: float) -> None:
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
