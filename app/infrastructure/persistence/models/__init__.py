"""ORM models. Import here so Alembic autogenerate sees every table on Base.metadata."""

from app.infrastructure.persistence.models.author import Author

__all__ = ["Author"]
