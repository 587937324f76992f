"""
Opedia Blogs API — Comment Schemas
====================================

What:  Request bodies for writing comments and the stored comment representation.

CommentCreate deliberately has no author field. Any `authorEmail` in the
request body is ignored; the author comes from the verified token.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from opedia_blogs.schemas.common import CamelModel, DocumentModel


class CommentCreate(CamelModel):
    content: Optional[str] = Field(default=None, description="Comment text (HTML is stripped; missing becomes empty)")


class CommentUpdate(CamelModel):
    content: Optional[str] = Field(default=None, description="Replacement comment text (HTML is stripped)")


class CommentResponse(DocumentModel):
    content: Optional[str] = None
    blog_id: Optional[str] = Field(default=None, description="Id of the blog, as given in the URL")
    author_email: Optional[str] = Field(default=None, description="Email claim of the commenter's token")
    created_at: Optional[datetime] = Field(default=None, description="Server time the comment was stored (UTC)")
