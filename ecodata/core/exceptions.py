"""
Domain exceptions.

Services and the storage layer raise these instead of ``HTTPException`` so they
stay independent of FastAPI. The server registers one handler that turns any
``EcodataError`` into a ``{"message": ...}`` JSON body with ``status_code``.
"""

from typing import Any, Dict, Optional


class EcodataError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, extra: Optional[Dict[str, Any]] = None) -> None:
        self.message = message or self.default_message
        self.extra = extra or {}
        super().__init__(self.message)


class BadRequestError(EcodataError):
    status_code = 400
    default_message = "Bad request"


class ConflictError(BadRequestError):
    """A uniqueness rule was violated (duplicate username, email or slug)."""

    default_message = "Resource already exists"


class AuthenticationError(EcodataError):
    status_code = 401
    default_message = "Authentication required"


class InvalidTokenError(EcodataError):
    status_code = 403
    default_message = "Invalid or expired token"


class PermissionDeniedError(EcodataError):
    status_code = 403
    default_message = "Admin permission required"


class NotFoundError(EcodataError):
    status_code = 404
    default_message = "Not found"


class PaymentServiceError(EcodataError):
    """Raised by the payment service; the status depends on the Stripe failure."""

    status_code = 500
    default_message = "Failed to process payment. Please try again later."

    def __init__(self, message: Optional[str] = None, *, status_code: int = 500, code: str = "unknown") -> None:
        super().__init__(message, extra={"code": code, "recoverable": status_code < 500})
        self.status_code = status_code


class StorageUnavailableError(EcodataError):
    """No configured storage backend could be initialised."""

    status_code = 503
    default_message = "Storage backend unavailable"
