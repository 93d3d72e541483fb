"""Core constants: cache key prefixes, cache tags and serializer groups.

Single source of truth for cache key structure (DRY). Used by the cache
key builders and the author use cases.
"""

# Cache key prefix for paginated list queries (list:<kind>:<page>:<limit>)
CACHE_PREFIX_LIST = "list"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Resource kinds used in list keys
RESOURCE_KIND_AUTHOR = "author"

# Tag shared by every cached author list page; invalidated on any author mutation.
AUTHOR_CACHE_TAG = "authorCache"

# Serialization group for author read models
GROUP_GET_AUTHORS = "getAuthors"

# Highest page accepted by list endpoints; keeps (page - 1) * limit within a bigint offset.
PAGINATION_MAX_PAGE = 1_000_000
