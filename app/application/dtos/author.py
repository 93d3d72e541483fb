"""DTOs for author use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorResult:
    """Author read-model (result of find_page, get_by_id, create_author, etc.)."""

    id: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class AuthorData:
    """Author fields as deserialized from a request body; not yet validated."""

    first_name: str | None
    last_name: str | None


@dataclass(frozen=True)
class CreatedAuthor:
    """Result of create_author: the persisted author and its serialized body."""

    author: AuthorResult
    payload: bytes
