"""Pydantic request/response schemas for the API."""

from app.schemas.author import (
    AuthorPayload,
    AuthorResponse,
    ErrorResponse,
    ValidationErrorResponse,
)
from app.schemas.health import HealthResponse, ReadinessResponse

__all__ = [
    "AuthorPayload",
    "AuthorResponse",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
    "ValidationErrorResponse",
]
