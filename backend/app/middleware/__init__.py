# Middleware package init
"""
StickyBoard Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    - Request ID sets the correlation id used by every log line and error body,
      and turns any unhandled exception into a 500 that still carries it
    - Rate Limit rejects over-quota clients before the route runs
    - Logging writes one access line per request to "stickyboard.access"
"""
