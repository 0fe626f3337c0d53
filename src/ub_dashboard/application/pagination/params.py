"""Application pagination – Pagination, Sorting, RequestParameters, QueryResult."""
from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Any, Callable, Generic, Mapping, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclasses.dataclass(frozen=True)
class Pagination:
    """Offset-based pagination state of a list view."""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def first(self) -> "Pagination":
        """Same page size, back on page 1."""
        return dataclasses.replace(self, page=1)


@dataclasses.dataclass(frozen=True)
class Sorting:
    """Single sort criterion."""
    field: str
    direction: SortDirection = SortDirection.ASC

    def toggled(self, field: str) -> "Sorting":
        """Flip direction when *field* is already sorted on, else sort it ascending."""
        if field == self.field:
            return Sorting(field, self.direction.flipped())
        return Sorting(field, SortDirection.ASC)


@dataclasses.dataclass(frozen=True)
class RequestParameters:
    """Everything a query function needs to fetch one page.

    Identical parameters describe the same request; they are the unit of
    cache keying and stale-response detection.
    """
    page: int
    page_size: int
    filters: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    sorting: Sorting | None = None
    global_filter: str = ""

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def as_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "filters": dict(self.filters),
            "sorting": (
                {"field": self.sorting.field, "direction": self.sorting.direction.value}
                if self.sorting is not None
                else None
            ),
            "global_filter": self.global_filter,
        }


def total_pages(total: int, page_size: int) -> int:
    """Number of pages for *total* rows; ``0`` (not ``1``) when there are none."""
    if total <= 0 or page_size <= 0:
        return 0
    return math.ceil(total / page_size)


@dataclasses.dataclass(frozen=True)
class QueryResult(Generic[T]):
    """One page of rows plus the total row count across all pages."""

    items: list[T]
    total: int

    def map(self, fn: Callable[[T], Any]) -> "QueryResult[Any]":
        """Return a new :class:`QueryResult` with each item transformed by *fn*."""
        return QueryResult(items=[fn(item) for item in self.items], total=self.total)

    @classmethod
    def empty(cls) -> "QueryResult[T]":
        return cls(items=[], total=0)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Pagination",
    "QueryResult",
    "RequestParameters",
    "SortDirection",
    "Sorting",
    "total_pages",
]
