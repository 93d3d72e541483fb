"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP). The cache port is
app.infrastructure.cache.cache_protocol.TagAwareCacheProtocol.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.author import AuthorData, AuthorResult
    from app.domain.exceptions import FieldError


# Serializer interface
class IAuthorSerializer(Protocol):
    """Protocol for author (de)serialization with serialization groups."""

    def serialize(
        self, value: AuthorResult | Sequence[AuthorResult], groups: Iterable[str] = ...
    ) -> bytes:
        """Serialize one author or a sequence of authors to JSON bytes."""

    def deserialize(self, data: bytes, groups: Iterable[str] = ...) -> AuthorData:
        """Parse a request body; raises ValidationException when malformed."""


# Validator interface
class IAuthorValidator(Protocol):
    """Protocol for author field validation."""

    def validate(self, author: AuthorData) -> list[FieldError]:
        """Return field-level errors (empty when valid)."""
