"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.author import AuthorResult


class IAuthorRepository(Protocol):
    """Protocol for author repository (DIP). Mutations become durable on commit()."""

    async def find_page(self, page: int, limit: int) -> list[AuthorResult]:
        """Return page (1-based) of limit authors in stable order."""

    async def get_by_id(self, author_id: str) -> AuthorResult | None:
        """Return author by ID, or None."""

    async def create_author(self, first_name: str, last_name: str) -> AuthorResult:
        """Create an author; the returned result carries the assigned id."""

    async def update_author(
        self, author_id: str, first_name: str, last_name: str
    ) -> AuthorResult | None:
        """Replace names; None if the author does not exist."""

    async def delete_author(self, author_id: str) -> bool:
        """Delete author; False if it does not exist."""

    async def commit(self) -> None:
        """Commit pending mutations."""
