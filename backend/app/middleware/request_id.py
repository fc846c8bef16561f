"""
StickyBoard Backend — Request ID Middleware
============================================

What:  Gives every request a short correlation id.
How:   Reuses the client's X-Request-ID header when present, otherwise makes
       an 8-char id from a UUID4. The id is stored in a ContextVar (read by
       the access logger and the exception handlers) and echoed back in the
       X-Request-ID response header.

This middleware is the outermost one, so it also renders the 500 for any
exception no handler claimed; otherwise Starlette's ServerErrorMiddleware
would answer without the id.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Builds the standard error body, stamped with the current request id."""
    content = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request id and returns it in the X-Request-ID header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = error_response(
                500,
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            )

        response.headers["X-Request-ID"] = rid
        return response
