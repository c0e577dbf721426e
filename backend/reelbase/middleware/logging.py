"""
Reelbase Backend — Request Logging Middleware
===============================================

What:  One log line per HTTP request: method, path, status, duration.
How:   Measures time around call_next, picks the log level from the status
       class and attaches the request ID from RequestIDMiddleware.

Log line:
    GET /api/movies/5 200 3.4ms [a1b2c3d4] from 127.0.0.1

Not logged: request bodies, form fields, headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from reelbase.middleware.request_id import request_id_var

logger = logging.getLogger("reelbase.access")

# Probes and static assets would drown out API traffic
_QUIET_PREFIXES = ("/health", "/static/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Levels:
        5xx → ERROR
        4xx → WARNING
        2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path.startswith(_QUIET_PREFIXES):
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
