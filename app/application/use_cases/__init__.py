"""Application use cases: one entry point per workflow."""

from app.application.use_cases.authors import AuthorService

__all__ = ["AuthorService"]
