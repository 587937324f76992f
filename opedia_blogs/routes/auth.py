"""
Opedia Blogs API — Token Route
================================

What:  POST /jwt signs the request body as token claims.
Who:   Called by the frontend right after sign-in, with `{"email": ...}`.

The endpoint does not look the caller up; any JSON object is signed. The
resulting token is valid for one hour on every bearer-protected route.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from opedia_blogs.context import AppContext
from opedia_blogs.dependencies import get_context
from opedia_blogs.schemas.common import ErrorResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/jwt",
    response_model=TokenResponse,
    responses={400: {"description": "Body is not a JSON object", "model": ErrorResponse}},
    summary="Issue a bearer token",
)
async def issue_token(
    claims: Dict[str, Any] = Body(..., description="Claims to sign, e.g. {\"email\": \"a@b.com\"}"),
    context: AppContext = Depends(get_context),
) -> TokenResponse:
    token = context.token_service.issue(claims)
    logger.info("Issued token for claims: %s", sorted(claims))
    return TokenResponse(token=token)
