"""
Opedia Blogs API — Service Unit Tests
=======================================

What:  UserService, BlogService and CommentService against mocked collections.
How:   The `mock_db` fixture hands every service the same MagicMock collection
       with AsyncMock driver methods; no database is involved.

What we test:
    ✅ Documents written with sanitized fields and returned with their ids
    ✅ Pagination arithmetic and out-of-range pages
    ✅ Driver errors surface as DatabaseError with generic messages
"""

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from opedia_blogs.exceptions import DatabaseError
from opedia_blogs.schemas.blog import BlogCreate, BlogUpdate
from opedia_blogs.schemas.comment import CommentCreate, CommentUpdate
from opedia_blogs.schemas.user import UserCreate
from opedia_blogs.services.blog_service import BlogService
from opedia_blogs.services.comment_service import CommentService
from opedia_blogs.services.user_service import UserService


class TestUserService:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_create_user_inserts_validated_fields(self, mock_db, mock_collection):
        payload = UserCreate(name=" Ann ", email="Ann@Example.com", password="s3cret")

        result = await self.service.create_user(mock_db, payload)

        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["name"] == "Ann"
        assert inserted["email"] == "ann@example.com"
        assert inserted["password"] == "s3cret"
        assert result.id == str(mock_collection.insert_one.return_value.inserted_id)

    @pytest.mark.asyncio
    async def test_list_users_returns_passwords(self, mock_db, mock_collection):
        mock_collection.find.return_value.to_list.return_value = [
            {"_id": ObjectId(), "name": "Ann", "email": "ann@example.com", "password": "pw"},
        ]

        users = await self.service.list_users(mock_db)

        assert len(users) == 1
        assert users[0].password == "pw"

    @pytest.mark.asyncio
    async def test_insert_failure_raises_database_error(self, mock_db, mock_collection):
        mock_collection.insert_one.side_effect = PyMongoError("connection reset")
        payload = UserCreate(name="Ann", email="ann@example.com", password="pw")

        with pytest.raises(DatabaseError, match="Failed to create user"):
            await self.service.create_user(mock_db, payload)


class TestBlogService:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_create_blog_sanitizes_title_and_content_only(self, mock_db, mock_collection):
        payload = BlogCreate(
            title="<script>x</script>Title",
            content="Body<img src=x onerror=alert(1)>",
            author_email="<b>a@b.com</b>",
            thumbnail="https://img.example/t.png",
        )

        result = await self.service.create_blog(mock_db, payload)

        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["title"] == "Title"
        assert "onerror" not in inserted["content"]
        assert inserted["authorEmail"] == "<b>a@b.com</b>"
        assert inserted["thumbnail"] == "https://img.example/t.png"
        assert result.title == "Title"

    @pytest.mark.asyncio
    async def test_list_blogs_computes_skip_and_total_pages(self, mock_db, mock_collection):
        mock_collection.count_documents.return_value = 5
        mock_collection.find.return_value.to_list.return_value = [
            {"_id": ObjectId(), "title": "c", "content": "c"},
            {"_id": ObjectId(), "title": "d", "content": "d"},
        ]

        result = await self.service.list_blogs(mock_db, page=2, page_size=2)

        mock_collection.find.assert_called_once_with({}, skip=2, limit=2)
        assert result.total_pages == 3
        assert [blog.title for blog in result.blogs] == ["c", "d"]

    @pytest.mark.asyncio
    async def test_negative_page_is_empty(self, mock_db, mock_collection):
        mock_collection.count_documents.return_value = 5

        result = await self.service.list_blogs(mock_db, page=-1, page_size=2)

        mock_collection.find.assert_not_called()
        assert result.blogs == []
        assert result.total_pages == 3

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, mock_db, mock_collection):
        mock_collection.count_documents.return_value = 5

        result = await self.service.list_blogs(mock_db, page=10**30, page_size=2)

        mock_collection.find.assert_not_called()
        assert result.blogs == []

    @pytest.mark.asyncio
    async def test_update_matches_object_id(self, mock_db, mock_collection):
        blog_id = ObjectId()

        await self.service.update_blog(mock_db, blog_id, BlogUpdate(title="<i>T</i>", content="C"))

        query, update = mock_collection.update_one.await_args.args
        assert query == {"_id": blog_id}
        assert update["$set"]["content"] == "C"

    @pytest.mark.asyncio
    async def test_update_without_fields_blanks_them(self, mock_db, mock_collection):
        await self.service.update_blog(mock_db, ObjectId(), BlogUpdate())

        _, update = mock_collection.update_one.await_args.args
        assert update == {"$set": {"title": "", "content": ""}}

    @pytest.mark.asyncio
    async def test_delete_reports_count(self, mock_db, mock_collection):
        mock_collection.delete_one.return_value.deleted_count = 0
        assert await self.service.delete_blog(mock_db, ObjectId()) == 0

    @pytest.mark.asyncio
    async def test_count_failure_raises_database_error(self, mock_db, mock_collection):
        mock_collection.count_documents.side_effect = PyMongoError("timeout")

        with pytest.raises(DatabaseError, match="Failed to fetch blogs"):
            await self.service.list_blogs(mock_db)


class TestCommentService:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_create_comment_uses_given_author(self, mock_db, mock_collection):
        result = await self.service.create_comment(
            mock_db,
            blog_id="65f0c0ffee0000000000abcd",
            payload=CommentCreate(content="<script>x</script>Nice"),
            author_email="a@b.com",
        )

        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["blogId"] == "65f0c0ffee0000000000abcd"
        assert inserted["authorEmail"] == "a@b.com"
        assert inserted["content"] == "Nice"
        assert inserted["createdAt"] is not None
        assert result.author_email == "a@b.com"

    @pytest.mark.asyncio
    async def test_blog_comments_filtered_by_string_id(self, mock_db, mock_collection):
        await self.service.list_blog_comments(mock_db, "some-blog")
        mock_collection.find.assert_called_once_with({"blogId": "some-blog"})

    @pytest.mark.asyncio
    async def test_update_comment_sanitizes(self, mock_db, mock_collection):
        comment_id = ObjectId()

        await self.service.update_comment(mock_db, comment_id, CommentUpdate(content="<style>p{}</style>ok"))

        query, update = mock_collection.update_one.await_args.args
        assert query == {"_id": comment_id}
        assert update == {"$set": {"content": "ok"}}

    @pytest.mark.asyncio
    async def test_delete_failure_raises_database_error(self, mock_db, mock_collection):
        mock_collection.delete_one.side_effect = PyMongoError("boom")

        with pytest.raises(DatabaseError, match="Failed to delete comment"):
            await self.service.delete_comment(mock_db, ObjectId())
