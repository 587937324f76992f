"""
Opedia Blogs API — Health Check and Root Routes
=================================================

What:  GET /health for monitoring and load balancer probes, and the plain
       GET / liveness banner.
How:   /health pings the MongoDB deployment and reports the result.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from opedia_blogs import __version__
from opedia_blogs.context import AppContext
from opedia_blogs.dependencies import get_context
from opedia_blogs.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Server is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    context: AppContext = Depends(get_context),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await context.client.admin.command("ping")
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
