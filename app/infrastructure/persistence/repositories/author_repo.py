"""Author repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.author import AuthorResult
from app.infrastructure.persistence.models.author import Author
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(a: Author) -> AuthorResult:
    """Map ORM Author to AuthorResult."""
    return AuthorResult(id=a.id, first_name=a.first_name, last_name=a.last_name)


class AuthorRepository(BaseRepository[Author]):
    """Author persistence. Mutations flush only; call commit() to make them durable."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Author)

    async def find_page(self, page: int, limit: int) -> list[AuthorResult]:
        """Return one page of authors, oldest first (ties broken by id)."""
        rows = await self.get_page(page, limit, Author.created_at.asc(), Author.id.asc())
        return [_to_result(a) for a in rows]

    async def get_by_id(self, author_id: str) -> AuthorResult | None:
        row = await super().get_by_id(author_id)
        return _to_result(row) if row else None

    async def create_author(self, first_name: str, last_name: str) -> AuthorResult:
        created = await self.create(Author(first_name=first_name, last_name=last_name))
        return _to_result(created)

    async def update_author(
        self, author_id: str, first_name: str, last_name: str
    ) -> AuthorResult | None:
        """Replace both names. Returns None if the author does not exist."""
        entity = await super().get_by_id(author_id)
        if not entity:
            return None
        entity.first_name = first_name
        entity.last_name = last_name
        updated = await self.update(entity)
        return _to_result(updated)

    async def delete_author(self, author_id: str) -> bool:
        """Delete author by id. Returns False if it does not exist."""
        entity = await super().get_by_id(author_id)
        if not entity:
            return False
        await self.delete(entity)
        return True
