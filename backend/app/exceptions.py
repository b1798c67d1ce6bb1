"""
Registry API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the failure modes of the
       request pipeline.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers registered in main.py translate them into JSON
       responses; context is logged, never returned.
Who:   Raised by services, the connection provider and the function client.

Exception Hierarchy:
    RegistryError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    │   └── StoreUnavailableError → 500 (connection could not be acquired)
    └── UpstreamServiceError     → 502 Bad Gateway

Field-level rule failures are raised by FastAPI itself as
RequestValidationError; ValidationError here covers pipeline preconditions
that span more than one field.
"""

from typing import Any, Dict, Optional


class RegistryError(Exception):
    """
    Base exception for all Registry API errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Debug info for server-side logs only
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RegistryError):
    """
    Raised when a request is well-formed field by field but still unusable.

    HTTP:    400 Bad Request, rendered in the same ``{"errors": [...]}`` shape
             as field-rule failures.
    Example: PATCH /api/company/C1 with neither companyName nor companyCity.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        location: str = "body",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.location = location

    def to_errors(self) -> list:
        """Render as a one-entry error list matching the field-rule format."""
        return [
            {
                "field": self.field or self.location,
                "message": self.message,
                "location": self.location,
            }
        ]


class NotFoundError(RegistryError):
    """
    Raised when a keyed mutation or delete matched zero rows.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(RegistryError):
    """
    Raised when executing a statement against the store fails.

    HTTP:    500 Internal Server Error

    The response always carries a generic message. Constraint names, SQL text
    and driver errors stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(DatabaseError):
    """
    Raised when no pooled connection could be acquired.

    When:    Store unreachable, credentials rejected, or the pool stayed
             exhausted past DB_POOL_TIMEOUT.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamServiceError(RegistryError):
    """
    Raised when the external function behind GET /say fails.

    When:    Transport error, timeout, non-2xx status, or a body that is not JSON.
    HTTP:    502 Bad Gateway
    """

    def __init__(
        self,
        message: str = "The upstream function is unavailable. Please try again later.",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["upstream_status"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
