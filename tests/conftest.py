"""
Opedia Blogs API — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── test_settings:   Settings for tests (known secret, generous rate limit)
    ├── mongo_client:    In-memory Motor-compatible client (mongomock-motor)
    ├── app:             Application built with the two fixtures above
    ├── test_client:     HTTPX AsyncClient talking to `app` over ASGI
    ├── auth_headers:    Authorization header for a token with email a@b.com
    └── mock_db:         MagicMock database whose collections have AsyncMock methods
"""

import os

# Override settings for testing BEFORE any application imports; importing
# opedia_blogs.main builds a module-level app from the environment.
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from opedia_blogs.config import Settings
from opedia_blogs.main import create_app


@pytest.fixture
def test_settings():
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        access_token_secret="test-secret",
        rate_limit_requests=1000,
        static_dir="does-not-exist",
        log_level="WARNING",
    )


@pytest.fixture
def mongo_client():
    """A fresh in-memory database server for each test."""
    return AsyncMongoMockClient()


@pytest.fixture
def app(test_settings, mongo_client):
    return create_app(test_settings, client=mongo_client)


@pytest.fixture
def db(app):
    """The database handle the app's routes write to."""
    return app.state.context.db


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(app):
    token = app.state.context.token_service.issue({"email": "a@b.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_collection():
    """
    A collection whose driver calls are AsyncMocks.

    Usage:
        mock_collection.insert_one.return_value.inserted_id = ObjectId()
        mock_collection.find.return_value.to_list.return_value = [doc]
    """
    collection = MagicMock()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)

    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def mock_db(mock_collection):
    """A database where every collection name returns `mock_collection`."""
    database = MagicMock()
    database.__getitem__.return_value = mock_collection
    return database
