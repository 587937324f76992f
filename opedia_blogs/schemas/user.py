"""
Opedia Blogs API — User Schemas
=================================

What:  Request model for POST /users and the stored user representation.

Validation (POST /users), in order per field:
    name      trimmed, must be non-empty, HTML-escaped
    email     must be a valid address, then normalized
    password  trimmed, must be non-empty, HTML-escaped

A failure on any field produces a 400 listing every failing field; nothing
is inserted.
"""

from typing import Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from opedia_blogs.sanitize import escape_html, normalize_email
from opedia_blogs.schemas.common import CamelModel, DocumentModel


class UserCreate(CamelModel):
    name: str = Field(description="Display name")
    email: EmailStr = Field(description="Email address")
    password: str = Field(description="Password (stored as given, escaped)")

    @field_validator("name", "password")
    @classmethod
    def require_text(cls, v: str, info: ValidationInfo) -> str:
        trimmed = v.strip()
        if not trimmed:
            raise ValueError(f"{info.field_name} must not be empty")
        return escape_html(trimmed)

    @field_validator("email")
    @classmethod
    def canonical_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(DocumentModel):
    """A stored user, returned verbatim (the password field included)."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
