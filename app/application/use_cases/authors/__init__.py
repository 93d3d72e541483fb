"""Author use cases."""

from app.application.use_cases.authors.author_operations import AuthorService

__all__ = ["AuthorService"]
