"""Application DTOs: read-models and inputs passed between layers (no ORM)."""

from app.application.dtos.author import AuthorData, AuthorResult, CreatedAuthor

__all__ = ["AuthorData", "AuthorResult", "CreatedAuthor"]
