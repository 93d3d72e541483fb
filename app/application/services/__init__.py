"""Application services: author serialization and validation."""

from app.application.services.author_serializer import AuthorSerializer
from app.application.services.author_validator import AuthorValidator

__all__ = ["AuthorSerializer", "AuthorValidator"]
