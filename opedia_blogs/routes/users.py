"""
Opedia Blogs API — User Route Handlers
========================================

What:  GET /users (bearer) and POST /users.
How:   Request bodies are validated by UserCreate; persistence is delegated
       to UserService.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from opedia_blogs.dependencies import get_database, require_token
from opedia_blogs.schemas.common import ErrorResponse
from opedia_blogs.schemas.user import UserCreate, UserResponse
from opedia_blogs.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all users",
)
async def list_users(
    claims: Dict[str, Any] = Depends(require_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid name, email or password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user",
    description=(
        "Validates name (non-empty), email (valid address) and password (non-empty). "
        "Name and password are trimmed and HTML-escaped; email is normalized."
    ),
)
async def create_user(
    payload: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.create_user(db, payload)
