"""
Registry API — Shared Response Schemas
=======================================

What:  Response models shared by every router: success messages, error
       bodies and the health report.
Why:   FastAPI uses them for serialization and for the OpenAPI document
       served at /api-docs.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of every successful mutation (create, update, upsert, delete)."""

    message: str = Field(description="Human-readable outcome, e.g. 'Company added'")


class FieldError(BaseModel):
    """One failed rule for one field."""

    field: str = Field(description="Field name, e.g. 'companyId'")
    message: str = Field(description="What is wrong with the value")
    location: str = Field(description="Where the field came from: path, query or body")
    value: Optional[str | int | float | bool] = Field(
        default=None, description="The rejected value, when one was sent"
    )


class ValidationErrorResponse(BaseModel):
    """
    400 body. `errors` lists every failed rule across all fields, in
    path → query → body order. It is never truncated to the first failure.
    """

    errors: List[FieldError]
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    Standard error body for 404, 500 and 502 responses.

    Example:
        {
            "error": "not_found",
            "message": "Company with ID 'C9' was not found",
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the service started")
