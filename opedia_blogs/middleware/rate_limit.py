"""
Opedia Blogs API — Rate Limiting Middleware
=============================================

What:  Per-IP sliding window rate limiter (100 requests per 15 minutes by default).
How:   SlidingWindowRateLimiter keeps a list of request timestamps per client
       address. The limiter instance lives in the AppContext; the middleware
       looks it up on every request instead of owning the state itself.
When:  Innermost middleware: runs after CORS, request ID and access logging,
       before any route handler.

Algorithm: Sliding Window Log
    1. Each IP gets a list of request timestamps
    2. On each request, drop timestamps older than the window
    3. If remaining count >= limit, reject with 429
    4. Otherwise, record the current timestamp and allow through

The state is process-local. Running several workers gives each its own
counters.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from opedia_blogs.exceptions import RateLimitExceededError
from opedia_blogs.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    In-memory sliding window counter keyed by client address.

    Attributes:
        max_requests: Requests allowed per window
        window:       Window length in seconds
        clock:        Time source, replaceable in tests
    """

    # Inactive addresses are purged every this many recorded requests
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        max_requests: int,
        window: int,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    def hit(self, key: str) -> Optional[int]:
        """
        Record a request for `key`.

        Returns:
            None when the request is allowed, otherwise the number of seconds
            until the oldest request in the window expires.
        """
        now = self.clock()
        window_start = now - self.window

        timestamps = [ts for ts in self._requests[key] if ts > window_start]
        self._requests[key] = timestamps

        if len(timestamps) >= self.max_requests:
            return int(timestamps[0] + self.window - now) + 1

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive(window_start)
        return None

    def count(self, key: str) -> int:
        """Requests currently recorded for `key` (including expired ones not yet pruned)."""
        return len(self._requests.get(key, []))

    def _cleanup_inactive(self, window_start: float) -> None:
        """Drop addresses whose newest request is older than the window."""
        inactive = [
            key for key, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for key in inactive:
            del self._requests[key]

        if inactive:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies the AppContext's SlidingWindowRateLimiter to every request.

    Excluded paths:
        - /health: Health checks should never be rate-limited
        - /docs, /openapi.json, /redoc: API documentation stays reachable

    Response on rate limit:
        HTTP 429 Too Many Requests with a Retry-After header
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        limiter: SlidingWindowRateLimiter = request.app.state.context.rate_limiter

        # Behind a proxy this is the proxy's address unless uvicorn runs
        # with --proxy-headers
        client_ip = (
            getattr(request.client, "host", "unknown")
            if request.client
            else "unknown"
        )

        retry_after = limiter.hit(client_ip)
        if retry_after is not None:
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                limiter.count(client_ip),
                limiter.window,
            )
            # Middleware runs outside the app's exception handlers, so the
            # error body is built here
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": exc.error_code,
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        return await call_next(request)
