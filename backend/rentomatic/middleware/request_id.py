"""
Rentomatic Backend - Request ID Middleware
===========================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
Why:   Error bodies carry the same ID, so a client report can be matched with
       the server-side log lines of that request.
How:   Reuses the client's X-Request-ID header when present (e.g. set by
       Nginx), otherwise generates a short UUID. Stored in a ContextVar for
       loggers and error serializers, and in request.state for handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests in one worker each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars is enough for correlation and readable in logs
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
