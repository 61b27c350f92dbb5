"""
Tests for request logging and rate limiting.
"""
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from devconnector.middleware.rate_limiter import RateLimitMiddleware


class MemoryCache:
    def __init__(self):
        self.values = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ttl=None):
        self.values[key] = value
        return True


def limited_app(cache, per_minute=2):
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        cache=cache,
        requests_per_minute=per_minute,
        requests_per_hour=100
    )

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.mark.asyncio
async def test_process_time_header(client):
    response = await client.get("/")

    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_rate_limit_rejects_after_limit():
    app = limited_app(MemoryCache(), per_minute=2)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        first = await client.get("/ping")
        second = await client.get("/ping")
        third = await client.get("/ping")

    assert first.headers["X-RateLimit-Remaining-Minute"] == "1"
    assert second.status_code == 200
    assert third.status_code == 429
    assert third.json()["error"] == "Too Many Requests"


@pytest.mark.asyncio
async def test_health_is_exempt_from_rate_limit():
    app = limited_app(MemoryCache(), per_minute=1)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        responses = [await client.get("/api/health") for _ in range(3)]

    assert [response.status_code for response in responses] == [200, 200, 200]
