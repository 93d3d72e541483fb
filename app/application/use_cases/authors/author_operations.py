"""Author operations: cached paginated list, get, create, update, delete.

List pages are read through the tag-aware cache under AUTHOR_CACHE_TAG.
Mutations commit first and invalidate the tag afterwards, so a reader can
never repopulate the cache with pre-mutation data once invalidation ran.
Reads never invalidate.
"""

from __future__ import annotations

import logging

from app.application.dtos.author import AuthorData, AuthorResult, CreatedAuthor
from app.application.interfaces.repositories import IAuthorRepository
from app.application.interfaces.services import IAuthorSerializer, IAuthorValidator
from app.core.constants import (
    AUTHOR_CACHE_TAG,
    GROUP_GET_AUTHORS,
    PAGINATION_MAX_PAGE,
)
from app.domain.exceptions import (
    FieldError,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.cache.cache_protocol import TagAwareCacheProtocol
from app.infrastructure.cache.keys import author_list_key

logger = logging.getLogger(__name__)

AUTHOR_TAGS = frozenset({AUTHOR_CACHE_TAG})
_GROUPS = (GROUP_GET_AUTHORS,)


class AuthorService:
    """Author use cases over IAuthorRepository, with cached list pages.

    Args:
        repo: Author persistence.
        cache: Tag-aware read-through cache shared by all requests.
        serializer: Produces the JSON bodies (and parses request bodies).
        validator: Field rules checked before any mutation.
        max_limit: Page sizes above this are clamped to it.
        list_ttl: Seconds a cached page may live; None uses the cache default.
    """

    def __init__(
        self,
        repo: IAuthorRepository,
        cache: TagAwareCacheProtocol,
        serializer: IAuthorSerializer,
        validator: IAuthorValidator,
        *,
        max_limit: int = 100,
        list_ttl: int | None = None,
    ) -> None:
        self.repo = repo
        self.cache = cache
        self.serializer = serializer
        self.validator = validator
        self.max_limit = max_limit
        self.list_ttl = list_ttl

    async def list_authors(self, page: int, limit: int) -> bytes:
        """Return the serialized page, from cache when present."""
        errors = [
            FieldError(name, "This value should be a positive integer.")
            for name, value in (("page", page), ("limit", limit))
            if value < 1
        ]
        if page > PAGINATION_MAX_PAGE:
            errors.append(
                FieldError("page", f"This value should be {PAGINATION_MAX_PAGE} or less.")
            )
        if errors:
            raise ValidationException(errors)
        limit = min(limit, self.max_limit)

        async def produce() -> bytes:
            authors = await self.repo.find_page(page, limit)
            return self.serializer.serialize(authors, _GROUPS)

        return await self.cache.get(
            author_list_key(page, limit), AUTHOR_TAGS, produce, ttl=self.list_ttl
        )

    async def _require(self, author_id: str) -> AuthorResult:
        author = await self.repo.get_by_id(author_id)
        if author is None:
            raise ResourceNotFoundException("author", author_id)
        return author

    async def get_author(self, author_id: str) -> bytes:
        """Return the serialized author; raises ResourceNotFoundException if absent."""
        return self.serializer.serialize(await self._require(author_id), _GROUPS)

    def _parse_valid(self, body: bytes) -> AuthorData:
        """Deserialize and validate a request body; raises ValidationException."""
        data = self.serializer.deserialize(body, _GROUPS)
        errors = self.validator.validate(data)
        if errors:
            raise ValidationException(errors)
        return data

    async def _invalidate(self) -> None:
        removed = await self.cache.invalidate_tags(AUTHOR_TAGS)
        logger.debug("Author mutation invalidated %s cached pages", removed)

    async def create_author(self, body: bytes) -> CreatedAuthor:
        data = self._parse_valid(body)
        author = await self.repo.create_author(
            first_name=data.first_name.strip(), last_name=data.last_name.strip()
        )
        await self.repo.commit()
        await self._invalidate()
        logger.info("Author created: %s", author.id)
        return CreatedAuthor(author=author, payload=self.serializer.serialize(author, _GROUPS))

    async def update_author(self, author_id: str, body: bytes) -> AuthorResult:
        """Replace both names. 404 is checked before the body is validated."""
        await self._require(author_id)
        data = self._parse_valid(body)
        updated = await self.repo.update_author(
            author_id, first_name=data.first_name.strip(), last_name=data.last_name.strip()
        )
        if updated is None:
            raise ResourceNotFoundException("author", author_id)
        await self.repo.commit()
        await self._invalidate()
        logger.info("Author updated: %s", author_id)
        return updated

    async def delete_author(self, author_id: str) -> None:
        if not await self.repo.delete_author(author_id):
            raise ResourceNotFoundException("author", author_id)
        await self.repo.commit()
        await self._invalidate()
        logger.info("Author deleted: %s", author_id)
