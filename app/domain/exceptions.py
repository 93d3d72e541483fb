"""Domain exceptions for the Bookshelf application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure (field uses the public JSON name)."""

    field: str
    message: str


class BookshelfException(Exception):
    """Base exception for all Bookshelf application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field errors, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BookshelfException):
    """Raised when input validation fails; carries every field-level error."""

    def __init__(
        self,
        errors: list[FieldError],
        message: str = "Validation failed",
    ) -> None:
        """Initialize with the collected field errors.

        Args:
            errors: Field-level failures (possibly from the validator or the deserializer).
            message: Summary message.
        """
        self.errors = list(errors)
        super().__init__(
            message,
            "VALIDATION_ERROR",
            {"errors": [asdict(e) for e in self.errors]},
        )


class ResourceNotFoundException(BookshelfException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'author').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )

