"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, cache,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.infrastructure.cache import close_cache, create_cache
from app.infrastructure.persistence.database import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, cache backend (Redis connects here; failure degrades
    to always-miss). Shutdown: cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    app.state.cache = await create_cache(settings)
    logger.info(
        "%s %s started (cache backend: %s, available: %s)",
        settings.app_name,
        settings.app_version,
        settings.cache_backend,
        app.state.cache.is_available(),
    )

    yield

    # ---- Shutdown ----
    await close_cache(getattr(app.state, "cache", None))
    app.state.cache = None
    logger.info("Cache closed")

    await dispose_engine()
