"""
Opedia Blogs API — Database Client Management
===============================================

What:  Motor (async MongoDB) client construction, collection names, ID
       parsing and document serialization helpers.
How:   One AsyncIOMotorClient per process, created by the application
       factory and held in the AppContext. Handlers receive the database
       handle through the get_database dependency (see context.py).

Collections (database `blogsDB`):
    users     name, email, password
    blogs     title, content, authorEmail, thumbnail
    comments  content, blogId (raw string), authorEmail, createdAt

There are no multi-document transactions. Deleting a blog does not touch
its comments.
"""

import logging
from typing import Any, Dict

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.server_api import ServerApi
from tenacity import (
    before_sleep_log,
    retry,
    stop_after_attempt,
    wait_exponential,
)

from opedia_blogs.config import Settings
from opedia_blogs.exceptions import ValidationError

logger = logging.getLogger(__name__)

USERS = "users"
BLOGS = "blogs"
COMMENTS = "comments"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Build the process-wide Motor client.

    The client connects lazily; nothing touches the network until the first
    operation (normally the startup ping).
    """
    return AsyncIOMotorClient(
        settings.database_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
        tz_aware=True,
    )


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def ping_database(client: AsyncIOMotorClient) -> None:
    """
    What:  Confirms the deployment is reachable.
    When:  Once during application startup.
    How:   Runs the `ping` admin command, retried up to three times with
           exponential backoff. The last failure is re-raised to the caller.
    """
    await client.admin.command("ping")
    logger.info("Pinged your deployment. You successfully connected to MongoDB!")


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Creates the secondary index used by GET /blogs/{id}/comments."""
    await db[COMMENTS].create_index([("blogId", ASCENDING)], name="idx_comments_blog_id")


def close_client(client: AsyncIOMotorClient) -> None:
    """Closes all pooled connections. Called during application shutdown."""
    client.close()


# ── Document Helpers ──────────────────────────────────────────────────────
def parse_object_id(value: str, resource: str = "document") -> ObjectId:
    """
    Convert a path parameter into an ObjectId.

    Raises:
        ValidationError: value is not a 24-character hex string (→ 400)
    """
    if not ObjectId.is_valid(value):
        raise ValidationError(
            message=f"'{value}' is not a valid {resource} id",
            field="id",
            context={"resource": resource},
        )
    return ObjectId(value)


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of a stored document with ObjectId values rendered as hex strings.

    Only top-level values are converted; none of the collections nest ids.
    """
    return {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in document.items()
    }
