"""
Opedia Blogs API — Comment Service
====================================

What:  Create, list, edit and delete comments in the `comments` collection.
Who:   Called by routes/comments.py.

Blog references:
    `blogId` is stored as the string taken from the URL, not as an
    ObjectId, and GET /blogs/{id}/comments matches it by string equality.
    Nothing checks that the blog exists.

Authorship:
    `authorEmail` is the `email` claim of the caller's verified token.
    Edits and deletes are open to any authenticated caller.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from opedia_blogs.database import COMMENTS, serialize_document
from opedia_blogs.exceptions import DatabaseError
from opedia_blogs.sanitize import strip_html
from opedia_blogs.schemas.comment import CommentCreate, CommentResponse, CommentUpdate

logger = logging.getLogger(__name__)


class CommentService:
    """Stateless; every method receives the database handle."""

    async def _find(
        self,
        db: AsyncIOMotorDatabase,
        query: Dict[str, Any],
    ) -> List[CommentResponse]:
        try:
            documents = await db[COMMENTS].find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error("Error fetching comments %s: %s", query, e)
            raise DatabaseError(
                message="Failed to fetch comments",
                context={"error_type": type(e).__name__},
            )
        return [CommentResponse.model_validate(serialize_document(doc)) for doc in documents]

    async def list_comments(self, db: AsyncIOMotorDatabase) -> List[CommentResponse]:
        return await self._find(db, {})

    async def list_blog_comments(
        self,
        db: AsyncIOMotorDatabase,
        blog_id: str,
    ) -> List[CommentResponse]:
        return await self._find(db, {"blogId": blog_id})

    async def create_comment(
        self,
        db: AsyncIOMotorDatabase,
        blog_id: str,
        payload: CommentCreate,
        author_email: Optional[str],
    ) -> CommentResponse:
        """
        Sanitize and insert a comment on `blog_id`.

        Args:
            blog_id:      Raw path parameter, stored unconverted
            author_email: From the token claims; the request body never supplies it
        """
        document = {
            "content": strip_html(payload.content),
            "blogId": blog_id,
            "authorEmail": author_email,
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            result = await db[COMMENTS].insert_one(document)
        except PyMongoError as e:
            logger.error("Error creating comment on blog %s: %s", blog_id, e)
            raise DatabaseError(
                message="Failed to create comment",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            )

        document["_id"] = result.inserted_id
        logger.info("Comment %s created on blog %s by %s", result.inserted_id, blog_id, author_email)
        return CommentResponse.model_validate(serialize_document(document))

    async def update_comment(
        self,
        db: AsyncIOMotorDatabase,
        comment_id: ObjectId,
        payload: CommentUpdate,
    ) -> int:
        try:
            result = await db[COMMENTS].update_one(
                {"_id": comment_id},
                {"$set": {"content": strip_html(payload.content)}},
            )
        except PyMongoError as e:
            logger.error("Error editing comment %s: %s", comment_id, e)
            raise DatabaseError(
                message="Failed to edit comment",
                context={"comment_id": str(comment_id), "error_type": type(e).__name__},
            )
        return result.matched_count

    async def delete_comment(self, db: AsyncIOMotorDatabase, comment_id: ObjectId) -> int:
        try:
            result = await db[COMMENTS].delete_one({"_id": comment_id})
        except PyMongoError as e:
            logger.error("Error deleting comment %s: %s", comment_id, e)
            raise DatabaseError(
                message="Failed to delete comment",
                context={"comment_id": str(comment_id), "error_type": type(e).__name__},
            )
        return result.deleted_count


comment_service = CommentService()
