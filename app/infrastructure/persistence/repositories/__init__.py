"""SQLAlchemy repositories returning application DTOs."""

from app.infrastructure.persistence.repositories.author_repo import AuthorRepository
from app.infrastructure.persistence.repositories.base import BaseRepository

__all__ = ["AuthorRepository", "BaseRepository"]
