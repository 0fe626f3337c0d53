"""Application – list-view building blocks (framework-agnostic)."""

from ub_dashboard.application.cache import CacheKey, QueryCache
from ub_dashboard.application.debounce import Debouncer
from ub_dashboard.application.pagination import (
    Pagination,
    QueryResult,
    RequestParameters,
    SortDirection,
    Sorting,
    total_pages,
)
from ub_dashboard.application.table import QueryOptions, TableQueryController

__all__ = [
    "CacheKey",
    "Debouncer",
    "Pagination",
    "QueryCache",
    "QueryOptions",
    "QueryResult",
    "RequestParameters",
    "SortDirection",
    "Sorting",
    "TableQueryController",
    "total_pages",
]
