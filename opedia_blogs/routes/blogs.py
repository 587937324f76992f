"""
Opedia Blogs API — Blog Route Handlers
========================================

What:  POST /blogs, GET /blogs, PUT /blogs/{id}, DELETE /blogs/{id}.
How:   Extracts path/query/body data, delegates to BlogService.

None of these routes require a token. Edits answer 200 and deletes 204
whether or not a blog with the given id exists; a malformed id is a 400.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from opedia_blogs.context import AppContext
from opedia_blogs.database import parse_object_id
from opedia_blogs.dependencies import get_context, get_database
from opedia_blogs.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
)
from opedia_blogs.schemas.common import ErrorResponse
from opedia_blogs.services.blog_service import blog_service, parse_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Blogs"])


@router.post(
    "/blogs",
    status_code=201,
    response_model=BlogResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a blog",
)
async def create_blog(
    payload: BlogCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BlogResponse:
    return await blog_service.create_blog(db, payload)


@router.get(
    "/blogs",
    response_model=BlogListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List blogs, one page at a time",
    description=(
        "Returns `{blogs, totalPages}`. The page size is fixed by configuration "
        "(2 by default). Missing or unparsable `page` values mean page 1; pages "
        "outside the range return an empty list."
    ),
)
async def list_blogs(
    page: Optional[str] = Query(default=None, description="1-based page number"),
    db: AsyncIOMotorDatabase = Depends(get_database),
    context: AppContext = Depends(get_context),
) -> BlogListResponse:
    # Taken as a string so "abc" falls back to page 1 instead of failing validation
    return await blog_service.list_blogs(
        db,
        page=parse_page(page),
        page_size=context.settings.blogs_page_size,
    )


@router.put(
    "/blogs/{blog_id}",
    responses={
        400: {"description": "Malformed id or body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Edit a blog's title and content",
)
async def update_blog(
    blog_id: str,
    payload: BlogUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Response:
    await blog_service.update_blog(db, parse_object_id(blog_id, "blog"), payload)
    return Response(status_code=200)


@router.delete(
    "/blogs/{blog_id}",
    status_code=204,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a blog (its comments are kept)",
)
async def delete_blog(
    blog_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Response:
    await blog_service.delete_blog(db, parse_object_id(blog_id, "blog"))
    return Response(status_code=204)
