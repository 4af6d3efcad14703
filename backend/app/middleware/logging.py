"""
Notes API — Request Logging Middleware
========================================

What:  One access log line for every HTTP request.
How:   Measures the time spent in the rest of the chain and logs method,
       path, status, duration, request id, the note id from the path (when
       the route has one) and client address.

Log level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request, e.g.

        GET /api/notes/1c2f... 404 3.2ms [a1b2c3d4] note=1c2f... from 10.0.0.7

    Health checks are skipped; probes hit them every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        # Filled in by the router once a /{note_id} route matched
        note_id = request.path_params.get("note_id")
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] note=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            note_id or "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "note_id": note_id,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
