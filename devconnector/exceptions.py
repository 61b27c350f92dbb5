"""
Service error taxonomy.

Every error carries the HTTP status it is surfaced with, so the exception
handlers in ``devconnector.middleware.error_handler`` can render any of them
without a lookup table.
"""
from typing import Any, Dict, List, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = 400
    error: str = "Bad Request"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400
    error = "Validation Error"

    @classmethod
    def from_fields(cls, errors: List[Dict[str, Any]]) -> "ValidationError":
        """Build an error from a list of ``{"field", "message"}`` entries."""
        message = "; ".join(error["message"] for error in errors)
        return cls(message, details=errors)


class Unauthenticated(ServiceError):
    """No credential was presented."""

    status_code = 401
    error = "Unauthenticated"


class InvalidCredential(ServiceError):
    """Credential is malformed, expired, or fails signature checks."""

    status_code = 401
    error = "Invalid Credential"


class Unauthorized(ServiceError):
    """Caller is authenticated but not permitted to act on the resource."""

    status_code = 403
    error = "Unauthorized"


class NotFound(ServiceError):
    status_code = 404
    error = "Not Found"


class AlreadyExists(ServiceError):
    status_code = 400
    error = "Already Exists"


class AlreadyLiked(AlreadyExists):
    error = "Already Liked"


class NotYetLiked(ServiceError):
    status_code = 400
    error = "Not Yet Liked"


class LookupFailed(ServiceError):
    """External repository lookup was unavailable or answered badly."""

    status_code = 502
    error = "Lookup Failed"


class InternalError(ServiceError):
    """Unexpected storage failure. The message is never sent to clients."""

    status_code = 500
    error = "Internal Server Error"
