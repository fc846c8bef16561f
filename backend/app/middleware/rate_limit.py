"""
StickyBoard Backend — Rate Limiting Middleware
===============================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests in memory. On
       every request, timestamps older than RATE_LIMIT_WINDOW are dropped;
       if RATE_LIMIT_REQUESTS remain the request is answered with 429 and a
       Retry-After header.

The board fires a position update at the end of every drag, so the default
quota (1000 per hour) is sized for interactive use rather than for the
expensive summarize call.

State is per process. Running several uvicorn workers multiplies the
effective quota by the worker count.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.exceptions import RateLimitExceededError
from app.middleware.request_id import error_response

logger = logging.getLogger(__name__)

# Cleanup of idle clients runs once per this many recorded requests
CLEANUP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding window limiter keyed by client IP."""

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            # Middleware sits outside the app exception handlers, so the 429 is
            # rendered here
            exc = RateLimitExceededError(retry_after=retry_after)
            return error_response(
                429,
                "rate_limit_exceeded",
                exc.message,
                exc.context,
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Forget clients with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
