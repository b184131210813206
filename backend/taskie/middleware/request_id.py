"""
Taskie Backend - Request ID Middleware
========================================

What:  Assigns a correlation ID to each request and echoes it back.
How:   Uses the client's X-Request-ID header when present, otherwise a short
       uuid4 prefix. The ID lives in a ContextVar for loggers and exception
       handlers, on request.state for handlers, and in the response header.
       Error envelopes set the header themselves, since the 500 response is
       written outside this middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local; concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        # Left set: the catch-all 500 handler runs after this dispatch returns.
        # Servers run each request in its own task, so it stays per-request.
        request_id_var.set(rid)
        request.state.request_id = rid
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
