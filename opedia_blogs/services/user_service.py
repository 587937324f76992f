"""
Opedia Blogs API — User Service
=================================

What:  Lists and registers users in the `users` collection.
Who:   Called by routes/users.py.

Users are stored exactly as validated by UserCreate: the password is kept
in its escaped form, not hashed, and GET /users returns it.
"""

import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from opedia_blogs.database import USERS, serialize_document
from opedia_blogs.exceptions import DatabaseError
from opedia_blogs.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; every method receives the database handle."""

    async def list_users(self, db: AsyncIOMotorDatabase) -> List[UserResponse]:
        try:
            documents = await db[USERS].find().to_list(length=None)
        except PyMongoError as e:
            logger.error("Error fetching users: %s", e)
            raise DatabaseError(
                message="Failed to fetch users",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.model_validate(serialize_document(doc)) for doc in documents]

    async def create_user(self, db: AsyncIOMotorDatabase, payload: UserCreate) -> UserResponse:
        """
        Insert a validated user.

        Returns:
            The stored document including its generated `_id`.

        Raises:
            DatabaseError: insert failed (→ 500)
        """
        document = {
            "name": payload.name,
            "email": payload.email,
            "password": payload.password,
        }
        try:
            result = await db[USERS].insert_one(document)
        except PyMongoError as e:
            logger.error("Error creating user: %s", e)
            raise DatabaseError(
                message="Failed to create user",
                context={"error_type": type(e).__name__},
            )

        document["_id"] = result.inserted_id
        logger.info("User created: %s", result.inserted_id)
        return UserResponse.model_validate(serialize_document(document))


user_service = UserService()
