"""
Burger Boots Backend — Access Log Middleware
==============================================

What:  One log line per request on the "burgerboots.access" logger:
           GET /api/products?page=2 200 12.4ms [a1b2c3d4] from 10.0.0.7
How:   Wraps the downstream app; runs inside RequestIDMiddleware so the
       request ID is already in the ContextVar.

Level by status class:
    5xx → ERROR, 4xx → WARNING, otherwise INFO.
    Media downloads (/uploads/...) that succeed are logged at DEBUG; a page
    with a dozen product images would otherwise log a dozen lines.

Form fields and uploaded bytes are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from burgerboots.config import settings
from burgerboots.middleware.request_id import request_id_var

logger = logging.getLogger("burgerboots.access")

# Load balancer probes
QUIET_PATHS = frozenset({"/health"})


def level_for(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path.startswith(f"{settings.media_url_prefix}/"):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = f"{path}?{request.url.query}" if request.url.query else path
        peer = request.client.host if request.client else "unknown"
        logger.log(
            level_for(path, response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            peer,
        )
        return response
