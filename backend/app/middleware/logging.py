"""
StickyBoard Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the chain and logs method,
       path, status, duration, request id and client IP to the
       "stickyboard.access" logger. The same values are attached as `extra`
       fields for log shippers that index record attributes.

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged; they carry note text and passwords.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("stickyboard.access")

# Polled by load balancer health checks every few seconds
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request after the response is produced.

    Typical durations:
        - GET /api/groups/{id}/notes: 5-30ms
        - PATCH /api/notes/{id}/position: 5-20ms (fired on every drag end)
        - POST /api/summarize: 1-6s (Gemini call dominates)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")
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
