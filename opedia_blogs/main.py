"""
Opedia Blogs API — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the AppContext, registers middleware, exception
       handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn opedia_blogs.main:app`) and the test suite, which
       calls create_app() with its own settings and an in-memory client.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware Chain:                                      │
    │  CORS → Request ID → Logging → Rate Limit               │
    │                                                         │
    │  Routes:                                                │
    │  /jwt  /users  /blogs  /blogs/{id}/comments  /comments  │
    │  /health  /                                             │
    │                                                         │
    │  Exception Handlers:                                    │
    │  Validation→400 │ Auth→401 │ DB→500 │ Unexpected→500    │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → settings check → ping MongoDB → ensure indexes
    Shutdown: close the Motor client
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from opedia_blogs import __version__
from opedia_blogs.config import Settings, settings as default_settings
from opedia_blogs.context import AppContext, build_context
from opedia_blogs.database import close_client, ensure_indexes, ping_database
from opedia_blogs.exceptions import (
    AuthenticationError,
    BlogAPIError,
    DatabaseError,
    ValidationError,
)
from opedia_blogs.middleware.logging import RequestLoggingMiddleware
from opedia_blogs.middleware.rate_limit import RateLimitMiddleware
from opedia_blogs.middleware.request_id import RequestIDMiddleware, request_id_var
from opedia_blogs.routes import auth, blogs, comments, health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure the root logger once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container log collectors read it there)
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate security-sensitive settings (logged, not fatal)
        3. Ping the deployment and create indexes (logged, not fatal;
           /health reports the database as disconnected)

    Shutdown:
        1. Close the Motor client
    """
    context: AppContext = app.state.context
    settings = context.settings

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Opedia Blogs API starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    try:
        await ping_database(context.client)
        await ensure_indexes(context.db)
    except PyMongoError as e:
        logger.error("Could not reach MongoDB: %s", str(e))

    logger.info("Opedia Blogs server is sitting on port %d", settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Opedia Blogs API shutting down...")
    close_client(context.client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        AuthenticationError                      → 401
        DatabaseError                            → 500 (driver details logged only)
        BlogAPIError (base)                      → 500
        Exception (fallback)                     → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": str(err["loc"][-1]) if err.get("loc") else None,
                "message": err.get("msg", "Invalid value"),
                "location": str(err["loc"][0]) if err.get("loc") else None,
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return _error_response(
            400,
            "validation_error",
            "Request validation failed",
            details={"errors": errors},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.error_code, exc.message, details=exc.context)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(BlogAPIError)
    async def handle_application_error(request: Request, exc: BlogAPIError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    client: Optional[AsyncIOMotorClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Defaults to the environment-loaded singleton
        client:   Database client to use instead of building a Motor client
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Opedia Blogs API",
        description="Blog publishing backend: users, bearer tokens, blogs and comments.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = build_context(settings, client=client)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: CORS → RequestID → Logging → RateLimit.
    # A 429 still gets CORS headers, a request ID and an access-log line.
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(blogs.router)
    app.include_router(comments.router)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


app = create_app()
