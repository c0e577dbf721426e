"""
Reelbase Backend — Request ID Middleware
==========================================

Tags every movie, employee and page request with an ID so that the access
line from RequestLoggingMiddleware and the store failures logged by the
exception handlers in main.py ("[a1b2c3d4] Store error: Error updating
movie ...") can be matched up, and so that a client holding the
X-Request-ID response header can point at the exact failing call.

An incoming X-Request-ID is reused when it is short printable text (a proxy
or the browser form flow may set one); anything else is replaced by the
first 8 hex characters of a UUID4. Header values end up verbatim in log
lines, so oversized or control-character IDs are never echoed.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(incoming: str) -> str:
    """Client-supplied ID when it is usable, a fresh short ID otherwise."""
    if incoming and _CLIENT_ID_PATTERN.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var and request.state.request_id; echoes the header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
