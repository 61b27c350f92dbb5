"""
Request/response logging middleware.
"""
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

TOKEN_HEADERS = ("x-auth-token", "authorization")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its outcome and duration.
    Credentials are never logged, only whether one was presented.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        has_token = any(request.headers.get(header) for header in TOKEN_HEADERS)

        logger.info(
            f"Request: {method} {path}",
            extra={
                "method": method,
                "path": path,
                "client_ip": client_ip,
                "has_token": has_token,
                "user_agent": request.headers.get("user-agent", "unknown")
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"Exception in {method} {path}",
                exc_info=True,
                extra={
                    "method": method,
                    "path": path,
                    "process_time": round(process_time, 3),
                    "client_ip": client_ip,
                    "error": str(e)
                }
            )
            raise

        process_time = time.perf_counter() - start_time
        logger.info(
            f"Response: {method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time": round(process_time, 3),
                "client_ip": client_ip
            }
        )
        response.headers["X-Process-Time"] = str(round(process_time, 3))
        return response
