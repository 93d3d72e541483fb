"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings come from settings and are
resolved per request, so tests can change them after import.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    return get_settings().rate_limit_writes


def _rate_limit_disabled() -> bool:
    return not get_settings().rate_limit_enabled


limit_writes = limiter.limit(_write_limit, exempt_when=_rate_limit_disabled)
