"""
Health check route.
"""
import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """
    Checks MongoDB and Redis.
    MongoDB is required; Redis only degrades the service when missing.
    """
    database = request.app.state.database_provider()
    cache = request.app.state.cache_service

    health_status = {
        "status": "healthy",
        "service": "DevConnector",
        "version": "1.0.0",
        "checks": {}
    }

    overall_healthy = True

    try:
        if database is not None:
            await database.command('ping')
            health_status["checks"]["mongodb"] = {
                "status": "healthy",
                "message": "Connected"
            }
        else:
            health_status["checks"]["mongodb"] = {
                "status": "unhealthy",
                "message": "Database not initialized"
            }
            overall_healthy = False
    except Exception:
        logger.error("MongoDB health check failed", exc_info=True)
        health_status["checks"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Database unreachable"
        }
        overall_healthy = False

    try:
        if cache.redis_client:
            await cache.redis_client.ping()
            health_status["checks"]["redis"] = {
                "status": "healthy",
                "message": "Connected"
            }
        else:
            health_status["checks"]["redis"] = {
                "status": "degraded",
                "message": "Cache not available (optional)"
            }
    except Exception:
        logger.warning("Redis health check failed", exc_info=True)
        health_status["checks"]["redis"] = {
            "status": "degraded",
            "message": "Cache unavailable"
        }

    if not overall_healthy:
        health_status["status"] = "unhealthy"

    return JSONResponse(status_code=200 if overall_healthy else 503, content=health_status)
