"""
Opedia Blogs API — Service Context
====================================

What:  The AppContext holds every piece of process-wide state: settings,
       the Motor client and database handle, the token service and the
       rate limiter.
How:   create_app() builds one context and stores it on app.state.context.
       Route handlers reach it through the dependencies in dependencies.py;
       no module keeps its own connection or counters.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from opedia_blogs.config import Settings
from opedia_blogs.database import create_client
from opedia_blogs.middleware.rate_limit import SlidingWindowRateLimiter
from opedia_blogs.security import TokenService


@dataclass
class AppContext:
    settings: Settings
    client: AsyncIOMotorClient
    token_service: TokenService
    rate_limiter: SlidingWindowRateLimiter

    @property
    def db(self) -> AsyncIOMotorDatabase:
        return self.client[self.settings.db_name]


def build_context(
    settings: Settings,
    client: Optional[AsyncIOMotorClient] = None,
) -> AppContext:
    """
    Assemble an AppContext from settings.

    Args:
        settings: Application settings
        client:   Pre-built database client; tests pass an in-memory one.
                  When omitted a Motor client is created from settings.
    """
    return AppContext(
        settings=settings,
        client=client if client is not None else create_client(settings),
        token_service=TokenService(
            secret=settings.access_token_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(seconds=settings.access_token_expire_seconds),
        ),
        rate_limiter=SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_requests,
            window=settings.rate_limit_window,
        ),
    )
