"""Tests for AuthorService: cached listing and mutate-then-invalidate ordering."""

import json
from unittest.mock import AsyncMock

import pytest

from app.application.services import AuthorSerializer, AuthorValidator
from app.application.services.author_validator import NAME_MAX_LENGTH
from app.application.use_cases.authors import AuthorService
from app.core.constants import PAGINATION_MAX_PAGE
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.cache import InMemoryTagAwareCache, author_list_key


class RecordingCache(InMemoryTagAwareCache):
    """In-memory cache that records invalidations into the repository's call log."""

    def __init__(self, calls: list[str]) -> None:
        super().__init__()
        self._calls = calls

    async def invalidate_tags(self, tags) -> int:
        self._calls.append("invalidate")
        return await super().invalidate_tags(tags)


@pytest.fixture
def service(author_repo, cache) -> AuthorService:
    return AuthorService(
        author_repo, cache, AuthorSerializer(), AuthorValidator(), max_limit=100
    )


@pytest.fixture
def recording_service(author_repo) -> AuthorService:
    return AuthorService(
        author_repo,
        RecordingCache(author_repo.calls),
        AuthorSerializer(),
        AuthorValidator(),
    )


def _body(first: str | None, last: str | None) -> bytes:
    return json.dumps({"firstName": first, "lastName": last}).encode()


class TestListAuthors:
    async def test_second_read_is_served_from_cache(self, service, author_repo) -> None:
        author_repo.seed("Jane", "Austen")

        first = await service.list_authors(page=1, limit=15)
        second = await service.list_authors(page=1, limit=15)

        assert first == second
        assert json.loads(first)[0]["firstName"] == "Jane"
        assert author_repo.count("find_page") == 1

    async def test_pages_are_cached_separately(self, service, author_repo, cache) -> None:
        for i in range(3):
            author_repo.seed(f"First{i}", f"Last{i}")

        page1 = json.loads(await service.list_authors(page=1, limit=2))
        page2 = json.loads(await service.list_authors(page=2, limit=2))

        assert [a["firstName"] for a in page1] == ["First0", "First1"]
        assert [a["firstName"] for a in page2] == ["First2"]
        assert author_list_key(1, 2) in cache
        assert author_list_key(2, 2) in cache

    async def test_limit_is_clamped_to_max(self, service, cache) -> None:
        await service.list_authors(page=1, limit=1000)
        assert author_list_key(1, 100) in cache
        assert len(cache) == 1

    async def test_page_beyond_data_is_empty_list(self, service) -> None:
        assert await service.list_authors(page=5, limit=15) == b"[]"

    @pytest.mark.parametrize("page,limit", [(0, 15), (1, 0), (-1, -1)])
    async def test_non_positive_page_or_limit_is_rejected(self, service, page, limit) -> None:
        with pytest.raises(ValidationException):
            await service.list_authors(page=page, limit=limit)

    async def test_page_above_max_is_rejected_before_reading(
        self, service, author_repo, cache
    ) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await service.list_authors(page=PAGINATION_MAX_PAGE + 1, limit=15)

        assert [e.field for e in exc_info.value.errors] == ["page"]
        assert author_repo.calls == []
        assert len(cache) == 0

    async def test_list_ttl_is_passed_to_cache(self, author_repo) -> None:
        cache = AsyncMock()
        cache.get.return_value = b"[]"
        service = AuthorService(
            author_repo, cache, AuthorSerializer(), AuthorValidator(), list_ttl=3600
        )

        await service.list_authors(page=2, limit=10)

        args, kwargs = cache.get.await_args
        assert args[0] == "list:author:2:10"
        assert set(args[1]) == {"authorCache"}
        assert kwargs["ttl"] == 3600

    async def test_reads_never_invalidate(self, recording_service, author_repo) -> None:
        author_repo.seed("Jane", "Austen")
        await recording_service.list_authors(page=1, limit=15)
        await recording_service.get_author("author0001")
        assert "invalidate" not in author_repo.calls


class TestMutations:
    async def test_create_commits_then_invalidates(
        self, recording_service, author_repo
    ) -> None:
        created = await recording_service.create_author(_body("Jane", "Austen"))

        assert author_repo.calls == ["create_author", "commit", "invalidate"]
        assert created.author.first_name == "Jane"
        assert json.loads(created.payload) == {
            "id": created.author.id,
            "firstName": "Jane",
            "lastName": "Austen",
        }

    async def test_create_strips_names(self, service, author_repo) -> None:
        created = await service.create_author(_body("  Jane ", "Austen  "))
        assert author_repo.authors[created.author.id].first_name == "Jane"
        assert author_repo.authors[created.author.id].last_name == "Austen"

    async def test_create_accepts_padded_name_at_max_length(self, service, author_repo) -> None:
        name = "x" * NAME_MAX_LENGTH
        created = await service.create_author(_body(f"  {name}  ", "Austen"))
        assert author_repo.authors[created.author.id].first_name == name

    async def test_create_makes_author_visible_in_cached_list(self, service) -> None:
        assert await service.list_authors(page=1, limit=15) == b"[]"

        await service.create_author(_body("Jane", "Austen"))

        listed = json.loads(await service.list_authors(page=1, limit=15))
        assert [a["lastName"] for a in listed] == ["Austen"]

    async def test_invalid_create_touches_neither_repo_nor_cache(
        self, recording_service, author_repo
    ) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await recording_service.create_author(_body("", None))

        assert [e.field for e in exc_info.value.errors] == ["firstName", "lastName"]
        assert author_repo.calls == []

    async def test_update_commits_then_invalidates(
        self, recording_service, author_repo
    ) -> None:
        author = author_repo.seed("Jane", "Austen")

        await recording_service.update_author(author.id, _body("Mary", "Shelley"))

        assert author_repo.calls == ["get_by_id", "update_author", "commit", "invalidate"]
        assert author_repo.authors[author.id].first_name == "Mary"

    async def test_invalid_update_keeps_cached_pages(
        self, service, author_repo, cache
    ) -> None:
        author = author_repo.seed("Jane", "Austen")
        await service.list_authors(page=1, limit=15)

        with pytest.raises(ValidationException):
            await service.update_author(author.id, _body("", "Shelley"))

        assert author_list_key(1, 15) in cache
        assert author_repo.authors[author.id].first_name == "Jane"

    async def test_update_missing_author_is_not_found_before_validation(
        self, service
    ) -> None:
        with pytest.raises(ResourceNotFoundException):
            await service.update_author("missing", b"not json")

    async def test_delete_commits_then_invalidates(
        self, recording_service, author_repo
    ) -> None:
        author = author_repo.seed("Jane", "Austen")

        await recording_service.delete_author(author.id)

        assert author_repo.calls == ["delete_author", "commit", "invalidate"]
        assert author.id not in author_repo.authors

    async def test_delete_missing_author_does_not_invalidate(
        self, recording_service, author_repo
    ) -> None:
        with pytest.raises(ResourceNotFoundException):
            await recording_service.delete_author("missing")
        assert author_repo.calls == ["delete_author"]

    async def test_failed_commit_does_not_invalidate(self, author_repo) -> None:
        cache = AsyncMock()
        author_repo.commit = AsyncMock(side_effect=RuntimeError("serialization failure"))
        service = AuthorService(author_repo, cache, AuthorSerializer(), AuthorValidator())

        with pytest.raises(RuntimeError):
            await service.create_author(_body("Jane", "Austen"))
        cache.invalidate_tags.assert_not_awaited()


class TestGetAuthor:
    async def test_get_returns_serialized_author(self, service, author_repo) -> None:
        author = author_repo.seed("Jane", "Austen")
        body = json.loads(await service.get_author(author.id))
        assert body == {"id": author.id, "firstName": "Jane", "lastName": "Austen"}

    async def test_get_missing_author_raises(self, service) -> None:
        with pytest.raises(ResourceNotFoundException):
            await service.get_author("missing")
