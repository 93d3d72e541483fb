"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

DB_URL = "postgresql+asyncpg://u:p@localhost:5432/bookshelf"


def test_defaults() -> None:
    settings = Settings(database_url=DB_URL, _env_file=None)
    assert settings.pagination_default_limit == 15
    assert settings.pagination_max_limit == 100
    assert settings.cache_namespace == "bookshelf"


def test_database_url_is_required(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError, match="DATABASE_URL is required"):
        Settings(_env_file=None)


def test_unknown_cache_backend_is_rejected() -> None:
    with pytest.raises(ValidationError, match="cache_backend"):
        Settings(database_url=DB_URL, cache_backend="memcached", _env_file=None)


def test_default_limit_must_not_exceed_max() -> None:
    with pytest.raises(ValidationError, match="PAGINATION_DEFAULT_LIMIT"):
        Settings(
            database_url=DB_URL,
            pagination_default_limit=50,
            pagination_max_limit=20,
            _env_file=None,
        )


def test_negative_ttl_is_rejected() -> None:
    with pytest.raises(ValidationError, match="CACHE_TTL_AUTHOR_LIST"):
        Settings(database_url=DB_URL, cache_ttl_author_list=-1, _env_file=None)
