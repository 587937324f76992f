"""
Opedia Blogs API — Access Log Middleware
==========================================

What:  One line on the `opedia_blogs.access` logger per request.

Line format:
    GET /blogs?page=2 200 3.4ms [1f0c2a9b] ip=10.0.0.7 bearer=no

The query string is kept (it carries only the page number); bodies and
the Authorization header value are never logged. `bearer=yes` only says
that a header was sent, not that it verified.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from opedia_blogs.middleware.request_id import request_id_var

logger = logging.getLogger("opedia_blogs.access")

# Probe endpoints; polled too often to be worth a line each
QUIET_PATHS = {"/", "/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] ip=%s bearer=%s",
            request.method,
            target,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            request.client.host if request.client else "unknown",
            "yes" if "authorization" in request.headers else "no",
        )
        return response
