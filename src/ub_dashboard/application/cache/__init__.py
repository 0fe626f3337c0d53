"""Application cache – query result caching."""
from ub_dashboard.application.cache.keys import CacheKey
from ub_dashboard.application.cache.store import DEFAULT_MAX_ENTRIES, CacheEntry, QueryCache

__all__ = ["CacheEntry", "CacheKey", "DEFAULT_MAX_ENTRIES", "QueryCache"]
