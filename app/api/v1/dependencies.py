"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the DB session, the shared cache and the
author use cases. Routes depend only on these dependencies, not on infra
directly; tests swap them through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.repositories import IAuthorRepository
from app.application.services import AuthorSerializer, AuthorValidator
from app.application.use_cases.authors import AuthorService
from app.core.config import get_settings
from app.infrastructure.cache import TagAwareCacheProtocol
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import AuthorRepository


def get_cache(request: Request) -> TagAwareCacheProtocol:
    """Cache owned by the application (created in lifespan, one per process)."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise RuntimeError("Cache not initialized; is the application lifespan running?")
    return cache


def get_author_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IAuthorRepository:
    """Author repository bound to the request's session."""
    return AuthorRepository(db)


def get_author_service(
    repo: Annotated[IAuthorRepository, Depends(get_author_repo)],
    cache: Annotated[TagAwareCacheProtocol, Depends(get_cache)],
) -> AuthorService:
    """Author use cases with cached list pages (composition root)."""
    settings = get_settings()
    return AuthorService(
        repo,
        cache,
        AuthorSerializer(),
        AuthorValidator(),
        max_limit=settings.pagination_max_limit,
        list_ttl=settings.cache_ttl_author_list,
    )
