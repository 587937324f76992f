"""
Opedia Blogs API — Blog Service
=================================

What:  Create, page through, edit and delete blogs in the `blogs` collection.
Who:   Called by routes/blogs.py.

Pagination (GET /blogs?page=N):
    Page-number pagination with a fixed page size (2 by default).
        skip       = (page - 1) * page_size
        totalPages = ceil(count / page_size)
    Documents come back in natural (insertion) order; there is no sort key.

    Page parsing follows a leading-integer parse: "3" and "3abc" give 3;
    a missing value, an unparsable value, or 0 falls back to page 1.
    Negative pages and pages past the end yield an empty list, never an
    error.

Edits and deletes do not report whether a document matched.
"""

import logging
import math
import re
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from opedia_blogs.database import BLOGS, serialize_document
from opedia_blogs.exceptions import DatabaseError
from opedia_blogs.sanitize import strip_html
from opedia_blogs.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_page(raw: Optional[str]) -> int:
    """
    Parse the `page` query parameter.

    Examples:
        None → 1, "" → 1, "abc" → 1, "0" → 1, "2" → 2, "2x" → 2, "-3" → -3
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(raw)
    if not match:
        return 1
    return int(match.group(1)) or 1


class BlogService:
    """Stateless; every method receives the database handle."""

    async def create_blog(self, db: AsyncIOMotorDatabase, payload: BlogCreate) -> BlogResponse:
        """
        Sanitize and insert a blog.

        Title and content are stripped of disallowed HTML; authorEmail and
        thumbnail are stored as given.
        """
        document = {
            "title": strip_html(payload.title),
            "content": strip_html(payload.content),
            "authorEmail": payload.author_email,
            "thumbnail": payload.thumbnail,
        }
        try:
            result = await db[BLOGS].insert_one(document)
        except PyMongoError as e:
            logger.error("Error creating blog: %s", e)
            raise DatabaseError(
                message="Failed to create blog",
                context={"error_type": type(e).__name__},
            )

        document["_id"] = result.inserted_id
        logger.info("Blog created: %s", result.inserted_id)
        return BlogResponse.model_validate(serialize_document(document))

    async def list_blogs(
        self,
        db: AsyncIOMotorDatabase,
        page: int = 1,
        page_size: int = 2,
    ) -> BlogListResponse:
        """
        Return one page of blogs and the total page count.

        Query plan:
            count_documents({})                       → totalPages
            find({}, skip=skip, limit=page_size)      → skipped for out-of-range pages
        """
        try:
            total = await db[BLOGS].count_documents({})
            total_pages = math.ceil(total / page_size)

            skip = (page - 1) * page_size
            if page < 1 or skip >= total:
                documents = []
            else:
                cursor = db[BLOGS].find({}, skip=skip, limit=page_size)
                documents = await cursor.to_list(length=page_size)
        except PyMongoError as e:
            logger.error("Error fetching blogs: %s", e)
            raise DatabaseError(
                message="Failed to fetch blogs",
                context={"error_type": type(e).__name__, "page": page},
            )

        return BlogListResponse(
            blogs=[BlogResponse.model_validate(serialize_document(doc)) for doc in documents],
            total_pages=total_pages,
        )

    async def update_blog(
        self,
        db: AsyncIOMotorDatabase,
        blog_id: ObjectId,
        payload: BlogUpdate,
    ) -> int:
        """
        Overwrite title and content (both sanitized).

        Returns:
            Number of documents matched (0 or 1). Routes answer 200 either way.
        """
        try:
            result = await db[BLOGS].update_one(
                {"_id": blog_id},
                {"$set": {
                    "title": strip_html(payload.title),
                    "content": strip_html(payload.content),
                }},
            )
        except PyMongoError as e:
            logger.error("Error editing blog %s: %s", blog_id, e)
            raise DatabaseError(
                message="Failed to edit blog",
                context={"blog_id": str(blog_id), "error_type": type(e).__name__},
            )

        if result.matched_count == 0:
            logger.info("Edit matched no blog: %s", blog_id)
        return result.matched_count

    async def delete_blog(self, db: AsyncIOMotorDatabase, blog_id: ObjectId) -> int:
        """
        Delete one blog. Its comments are left in place.

        Returns:
            Number of documents deleted (0 or 1).
        """
        try:
            result = await db[BLOGS].delete_one({"_id": blog_id})
        except PyMongoError as e:
            logger.error("Error deleting blog %s: %s", blog_id, e)
            raise DatabaseError(
                message="Failed to delete blog",
                context={"blog_id": str(blog_id), "error_type": type(e).__name__},
            )
        return result.deleted_count


blog_service = BlogService()
