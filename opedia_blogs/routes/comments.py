"""
Opedia Blogs API — Comment Route Handlers
===========================================

What:  GET /comments, POST and GET /blogs/{id}/comments,
       PUT and DELETE /comments/{id}.

Auth:
    Writing, editing and deleting need a bearer token. Reading does not.
    The author of a new comment is the token's `email` claim.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from opedia_blogs.database import parse_object_id
from opedia_blogs.dependencies import get_database, require_token
from opedia_blogs.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from opedia_blogs.schemas.common import ErrorResponse
from opedia_blogs.services.comment_service import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Comments"])

_AUTH_RESPONSES = {
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/comments",
    response_model=List[CommentResponse],
    summary="List every comment on every blog",
)
async def list_comments(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[CommentResponse]:
    return await comment_service.list_comments(db)


@router.post(
    "/blogs/{blog_id}/comments",
    status_code=201,
    response_model=CommentResponse,
    responses=_AUTH_RESPONSES,
    summary="Comment on a blog",
)
async def create_comment(
    blog_id: str,
    payload: CommentCreate,
    claims: Dict[str, Any] = Depends(require_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> CommentResponse:
    return await comment_service.create_comment(
        db,
        blog_id=blog_id,
        payload=payload,
        author_email=claims.get("email"),
    )


@router.get(
    "/blogs/{blog_id}/comments",
    response_model=List[CommentResponse],
    summary="List the comments on one blog",
)
async def list_blog_comments(
    blog_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[CommentResponse]:
    return await comment_service.list_blog_comments(db, blog_id)


@router.put(
    "/comments/{comment_id}",
    responses=_AUTH_RESPONSES,
    summary="Edit a comment",
)
async def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    claims: Dict[str, Any] = Depends(require_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Response:
    await comment_service.update_comment(db, parse_object_id(comment_id, "comment"), payload)
    return Response(status_code=200)


@router.delete(
    "/comments/{comment_id}",
    status_code=204,
    responses=_AUTH_RESPONSES,
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: str,
    claims: Dict[str, Any] = Depends(require_token),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Response:
    await comment_service.delete_comment(db, parse_object_id(comment_id, "comment"))
    return Response(status_code=204)
