"""
Opedia Blogs API — Shared Schemas
===================================

What:  Base model for stored documents plus the error, token and health
       response models used across routes.

Wire format:
    Fields are snake_case in Python and camelCase on the wire
    (author_email ↔ authorEmail). Document ids are exposed as `_id`,
    a 24-character hex string.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both camelCase and snake_case input; serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentModel(CamelModel):
    """
    A document as stored in a collection.

    extra="allow": fields written by older clients or other tools are passed
    through to the response unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(alias="_id", description="Generated document id (hex ObjectId)")


class TokenResponse(BaseModel):
    token: str = Field(description="Signed bearer token, valid for one hour")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Request validation failed",
            "details": {"errors": [{"field": "email", "message": "...", "location": "body"}]},
            "request_id": "1f0c2a9b"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
