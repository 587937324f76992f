"""
Opedia Blogs API — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, which hands the values to the
       service context; tests build their own Settings instances.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments MUST
    override ACCESS_TOKEN_SECRET and the database credentials.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # The connection string is assembled from credentials unless a full URI
    # is supplied via MONGODB_URI. Without either, a local mongod is used.
    db_user: str = Field(default="")
    db_pass: str = Field(default="")
    db_cluster_host: str = Field(default="cluster0.g9xsrko.mongodb.net")
    mongodb_uri: str = Field(default="", description="Full connection string override")
    db_name: str = Field(default="blogsDB")

    # Milliseconds the driver waits to find a usable server before failing an operation
    db_server_selection_timeout_ms: int = Field(default=10_000, ge=100, le=120_000)

    @property
    def database_uri(self) -> str:
        """Connection string for the MongoDB deployment."""
        if self.mongodb_uri:
            return self.mongodb_uri
        if not (self.db_user and self.db_pass):
            return "mongodb://localhost:27017"
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
            f"@{self.db_cluster_host}/?retryWrites=true&w=majority"
        )

    # ── Tokens ────────────────────────────────────────────────────────────
    access_token_secret: str = Field(default="change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_seconds: int = Field(default=3600, ge=60, le=86400)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated allow-list, parsed by cors_origins_list
    cors_origins: str = Field(
        default="http://localhost:5173,https://opedia-blogs-eanur.netlify.app"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    static_dir: str = Field(default="public")

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window: 100 requests per 15 minutes
    rate_limit_requests: int = Field(default=100, ge=1, le=10000)
    rate_limit_window: int = Field(default=900, ge=1, le=86400)  # seconds

    # ── Pagination ────────────────────────────────────────────────────────
    blogs_page_size: int = Field(default=2, ge=1, le=100)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.access_token_secret or self.access_token_secret == "change-me":
            errors.append("ACCESS_TOKEN_SECRET is not set. Tokens are signed with a placeholder.")
        if not self.mongodb_uri and not (self.db_user and self.db_pass):
            errors.append("DB_USER/DB_PASS (or MONGODB_URI) are not set.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, read by the application factory
settings = Settings()
