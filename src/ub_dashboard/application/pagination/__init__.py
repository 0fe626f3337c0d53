"""Application pagination – pagination/sort/request/result primitives."""
from ub_dashboard.application.pagination.params import (
    DEFAULT_PAGE_SIZE,
    Pagination,
    QueryResult,
    RequestParameters,
    SortDirection,
    Sorting,
    total_pages,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Pagination",
    "QueryResult",
    "RequestParameters",
    "SortDirection",
    "Sorting",
    "total_pages",
]
