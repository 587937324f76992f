"""
Opedia Blogs API — Rate Limiter Tests
=======================================

What:  Sliding window arithmetic with a controllable clock, and the 429
       response produced by the middleware.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from opedia_blogs.main import create_app
from opedia_blogs.middleware.rate_limit import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestSlidingWindowRateLimiter:

    def setup_method(self):
        self.clock = FakeClock()
        self.limiter = SlidingWindowRateLimiter(max_requests=3, window=900, clock=self.clock)

    def test_allows_up_to_limit(self):
        assert [self.limiter.hit("1.2.3.4") for _ in range(3)] == [None, None, None]

    def test_rejects_over_limit_with_retry_after(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        self.clock.now += 100
        assert self.limiter.hit("1.2.3.4") == 801

    def test_clients_counted_separately(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        assert self.limiter.hit("5.6.7.8") is None

    def test_window_slides(self):
        for _ in range(3):
            self.limiter.hit("1.2.3.4")
        self.clock.now += 901
        assert self.limiter.hit("1.2.3.4") is None

    def test_rejected_requests_not_recorded(self):
        for _ in range(5):
            self.limiter.hit("1.2.3.4")
        assert self.limiter.count("1.2.3.4") == 3

    def test_inactive_clients_cleaned_up(self):
        limiter = SlidingWindowRateLimiter(max_requests=5, window=10, clock=self.clock)
        limiter.CLEANUP_EVERY = 2
        limiter.hit("old")
        self.clock.now += 60
        limiter.hit("new")
        assert limiter.count("old") == 0
        assert limiter.count("new") == 1


class TestRateLimitMiddleware:

    @pytest.mark.asyncio
    async def test_returns_429_after_limit(self, test_settings, mongo_client):
        settings = test_settings.model_copy(update={"rate_limit_requests": 2})
        app = create_app(settings, client=mongo_client)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            assert (await client.get("/")).status_code == 200
            assert (await client.get("/")).status_code == 200
            response = await client.get("/")

        assert response.status_code == 429
        assert response.json()["error"] == "rate_limit_exceeded"
        assert int(response.headers["Retry-After"]) > 0

    @pytest.mark.asyncio
    async def test_limiter_state_lives_in_context(self, test_settings, mongo_client):
        settings = test_settings.model_copy(update={"rate_limit_requests": 1})
        first = create_app(settings, client=mongo_client)
        second = create_app(settings, client=mongo_client)

        async with AsyncClient(transport=ASGITransport(app=first), base_url="http://test") as client:
            await client.get("/")
            assert (await client.get("/")).status_code == 429

        async with AsyncClient(transport=ASGITransport(app=second), base_url="http://test") as client:
            assert (await client.get("/")).status_code == 200

    @pytest.mark.asyncio
    async def test_429_readable_by_allowed_origin(self, test_settings, mongo_client):
        settings = test_settings.model_copy(update={"rate_limit_requests": 1})
        app = create_app(settings, client=mongo_client)
        headers = {"Origin": "http://localhost:5173", "X-Request-ID": "burst-2"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            await client.get("/blogs", headers=headers)
            response = await client.get("/blogs", headers=headers)

        assert response.status_code == 429
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["X-Request-ID"] == "burst-2"
        assert response.json()["request_id"] == "burst-2"
