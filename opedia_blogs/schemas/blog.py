"""
Opedia Blogs API — Blog Schemas
=================================

What:  Request bodies for creating and editing blogs, the stored blog
       representation, and the paginated list wrapper.

Sanitization of title/content happens in BlogService, not here, so the
schemas describe exactly what the client sent.
"""

from typing import List, Optional

from pydantic import Field

from opedia_blogs.schemas.common import CamelModel, DocumentModel


class BlogCreate(CamelModel):
    title: Optional[str] = Field(default=None, description="Blog title (HTML is stripped; missing becomes empty)")
    content: Optional[str] = Field(default=None, description="Blog body (HTML is stripped; missing becomes empty)")
    author_email: Optional[str] = Field(default=None, description="Author's email, stored as given")
    thumbnail: Optional[str] = Field(default=None, description="Thumbnail URL, stored as given")


class BlogUpdate(CamelModel):
    """Both fields are overwritten on every edit; a missing one is stored empty."""

    title: Optional[str] = None
    content: Optional[str] = None


class BlogResponse(DocumentModel):
    title: Optional[str] = None
    content: Optional[str] = None
    author_email: Optional[str] = None
    thumbnail: Optional[str] = None


class BlogListResponse(CamelModel):
    """
    One page of blogs.

    totalPages = ceil(total blogs / page size). Pages outside
    1..totalPages come back with an empty `blogs` list.
    """

    blogs: List[BlogResponse] = Field(description="Blogs on the requested page")
    total_pages: int = Field(description="Number of pages at the current page size")
