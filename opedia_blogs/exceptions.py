"""
Opedia Blogs API — Custom Exception Hierarchy
===============================================

What:  Errors raised by services, dependencies and middleware.
How:   Every class carries a message, a context dict, and the HTTP status and
       `error` code it maps to. The handlers in main.py turn them into
       `{error, message, request_id, details?}` bodies.

Exception Hierarchy:
    BlogAPIError (base)          → 500 server_error
    ├── ValidationError          → 400 validation_error
    ├── AuthenticationError      → 401 unauthorized
    ├── DatabaseError            → 500 server_error
    └── RateLimitExceededError   → 429 rate_limit_exceeded (answered by the middleware)
"""

from typing import Any, Dict, Optional


class BlogAPIError(Exception):
    """
    Base exception for all application errors.

    Class attributes:
        status_code: HTTP status the global handlers answer with
        error_code:  Value of the `error` field in the JSON body

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; returned only for 400 and 429)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogAPIError):
    """
    Raised for client input that passed schema validation but is still unusable,
    such as a path id that is not an ObjectId.

    Body and query failures raised by FastAPI (RequestValidationError) are
    answered with the same status and error code in main.py.
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(BlogAPIError):
    """
    Raised when a bearer-protected route gets no token or a bad one.

    Messages:
        "Unauthorized access": no Authorization header at all
        "Forbidden access":    token missing, malformed, badly signed or expired

    Both are answered with 401; the message is the only difference.
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Unauthorized access",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BlogAPIError):
    """
    An insert, find, update, delete or count failed inside the driver.

    The message names the operation but nothing more ("Failed to create blog");
    the driver's own error type goes into context and is only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(BlogAPIError):
    """Built by RateLimitMiddleware when a client IP is over its window quota."""

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(
            message=f"Too many requests. Please wait {retry_after} seconds before retrying.",
            context=ctx,
        )
        self.retry_after = retry_after
