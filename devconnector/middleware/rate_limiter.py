"""
Rate limiting middleware.
Uses Redis so limits hold across workers.
"""
import time
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from devconnector.services.cache_service import CacheService
import logging

logger = logging.getLogger(__name__)

EXEMPT_PATHS = ("/api/health", "/docs", "/redoc", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate limiting middleware using Redis.
    Limits requests per IP address. Without Redis every request is allowed.
    """

    def __init__(
        self,
        app,
        cache: CacheService,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000
    ):
        super().__init__(app)
        self.cache = cache
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour

    def _reject(self, limit: int, window: str) -> JSONResponse:
        message = f"Rate limit exceeded. Maximum {limit} requests per {window}."
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "success": False,
                "error": "Too Many Requests",
                "message": message,
                "status_code": status.HTTP_429_TOO_MANY_REQUESTS
            }
        )

    async def dispatch(self, request: Request, call_next):
        """Check rate limits before processing request."""
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        minute_key = f"rate_limit:minute:{client_ip}:{int(time.time() / 60)}"
        minute_count = int(await self.cache.get(minute_key) or 0)
        if minute_count >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded (per minute) for IP: {client_ip}")
            return self._reject(self.requests_per_minute, "minute")

        hour_key = f"rate_limit:hour:{client_ip}:{int(time.time() / 3600)}"
        hour_count = int(await self.cache.get(hour_key) or 0)
        if hour_count >= self.requests_per_hour:
            logger.warning(f"Rate limit exceeded (per hour) for IP: {client_ip}")
            return self._reject(self.requests_per_hour, "hour")

        await self.cache.set(minute_key, minute_count + 1, ttl=60)
        await self.cache.set(hour_key, hour_count + 1, ttl=3600)

        response = await call_next(request)

        response.headers["X-RateLimit-Limit-Minute"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining-Minute"] = str(self.requests_per_minute - minute_count - 1)
        response.headers["X-RateLimit-Limit-Hour"] = str(self.requests_per_hour)
        response.headers["X-RateLimit-Remaining-Hour"] = str(self.requests_per_hour - hour_count - 1)

        return response
