"""Cache key builders. Single place for key format (DRY).

Key components (resource kind, etc.) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys. Page and limit must be positive integers.
"""

from collections.abc import Iterable

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_LIST,
    RESOURCE_KIND_AUTHOR,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _validate_positive_int(value: int, name: str) -> None:
    # bool is an int subclass; True would silently become page 1
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Cache key component {name!r} must be a positive integer, got {value!r}")


def list_key(resource_kind: str, page: int, limit: int) -> str:
    """Cache key for one page of a paginated list query (list:<kind>:<page>:<limit>)."""
    _validate_key_component(resource_kind, "resource_kind")
    _validate_positive_int(page, "page")
    _validate_positive_int(limit, "limit")
    return CACHE_KEY_SEP.join((CACHE_PREFIX_LIST, resource_kind, str(page), str(limit)))


def author_list_key(page: int, limit: int) -> str:
    """Cache key for a page of the author list."""
    return list_key(RESOURCE_KIND_AUTHOR, page, limit)


def validate_key(key: str) -> None:
    """Raise ValueError for an empty cache key."""
    if not key:
        raise ValueError("Cache key must not be empty")


def normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Return tags deduplicated and sorted; reject an empty set or empty tag names.

    Raises:
        ValueError: If no tag is given or a tag is empty.
    """
    if isinstance(tags, str):
        tags = (tags,)
    normalized = tuple(sorted(set(tags)))
    if not normalized:
        raise ValueError("At least one cache tag is required")
    if any(not tag for tag in normalized):
        raise ValueError("Cache tags must be non-empty strings")
    return normalized
