"""
Opedia Blogs API — FastAPI Dependencies
=========================================

What:  Injects the AppContext, the database handle and verified token
       claims into route handlers.

Example usage in a route:
    @router.get("/users")
    async def list_users(
        db: AsyncIOMotorDatabase = Depends(get_database),
        claims: dict = Depends(require_token),
    ):
        ...
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from opedia_blogs.context import AppContext
from opedia_blogs.exceptions import AuthenticationError
from opedia_blogs.security import FORBIDDEN_MESSAGE, UNAUTHORIZED_MESSAGE, bearer_token


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_database(context: AppContext = Depends(get_context)) -> AsyncIOMotorDatabase:
    return context.db


async def require_token(
    authorization: Optional[str] = Header(default=None),
    context: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """
    Guard for bearer-protected routes.

    Returns:
        The decoded claims, for handlers that need the caller's identity.

    Raises:
        AuthenticationError: "Unauthorized access" without a header,
                             "Forbidden access" for a bad or expired token.
    """
    if not authorization:
        raise AuthenticationError(message=UNAUTHORIZED_MESSAGE)

    token = bearer_token(authorization)
    if not token:
        raise AuthenticationError(message=FORBIDDEN_MESSAGE)
    return context.token_service.decode(token)
