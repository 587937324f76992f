"""
Opedia Blogs API — Request ID Middleware
==========================================

What:  Tags every request with a correlation ID, echoed in X-Request-ID.
How:   A client-sent X-Request-ID is reused when it is a short token of
       letters, digits, '-' and '_'; anything else is replaced by eight hex
       characters of a UUID4. The ID is held in `request_id_var` while the
       request runs, so log lines and error bodies can include it.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        sent = request.headers.get(HEADER, "")
        rid = sent if _SAFE_ID.match(sent) else new_request_id()

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[HEADER] = rid
        return response
