"""
Global exception handlers.
Provides consistent error responses across the application.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from devconnector.exceptions import InternalError, ServiceError

logger = logging.getLogger(__name__)


async def service_exception_handler(
    request: Request,
    exc: ServiceError
) -> JSONResponse:
    """
    Handle errors raised by the service layer.
    Client faults are reported as-is; internal errors are logged and masked.
    """
    if isinstance(exc, InternalError):
        logger.error(
            f"Internal error on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.error,
                "message": "An internal server error occurred",
                "status_code": exc.status_code
            }
        )

    logger.warning(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")

    content = {
        "success": False,
        "error": exc.error,
        "message": exc.message,
        "status_code": exc.status_code
    }
    if exc.details:
        content["details"] = exc.details

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.
    Returns user-friendly error messages.
    """
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error.get("loc", []))
        errors.append({
            "field": field,
            "message": error.get("msg"),
            "type": error.get("type")
        })

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "error": "Validation Error",
            "details": errors,
            "message": "Invalid request data. Please check your input."
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTP exceptions with consistent response format.
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "status_code": exc.status_code,
            "message": exc.detail
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle all unhandled exceptions.
    Logs full traceback; the response never carries exception text.
    """
    logger.error(
        f"Unhandled exception on {request.url.path}",
        exc_info=exc,
        extra={
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else None
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "Internal Server Error",
            "message": "An internal server error occurred",
            "status_code": 500
        }
    )
