"""Author API schemas (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthorPayload(BaseModel):
    """Request body for POST/PUT /authors.

    Fields are optional here so missing or blank names reach the validator
    and come back as 400 field errors; unknown keys (e.g. id) are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    first_name: str | None = None
    last_name: str | None = None


class AuthorResponse(BaseModel):
    """Author as returned by GET /authors, GET /authors/{id} and POST /authors."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    first_name: str
    last_name: str


class FieldErrorResponse(BaseModel):
    field: str = Field(..., description="JSON field name (e.g. firstName)")
    message: str


class ValidationErrorDetails(BaseModel):
    errors: list[FieldErrorResponse]


class ValidationErrorResponse(BaseModel):
    """400 body: every failed field rule."""

    error: str = "VALIDATION_ERROR"
    message: str
    details: ValidationErrorDetails


class ErrorResponse(BaseModel):
    """Generic error body (404, 500, ...)."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
