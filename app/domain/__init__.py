"""Domain layer: exceptions shared by the application and API layers.

No dependencies on infrastructure or presentation.
"""

from app.domain.exceptions import (
    BookshelfException,
    FieldError,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "BookshelfException",
    "FieldError",
    "ResourceNotFoundException",
    "ValidationException",
]
