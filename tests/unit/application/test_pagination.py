"""Unit tests for pagination, sorting and request primitives."""
import dataclasses

import pytest

from ub_dashboard.application.pagination import (
    DEFAULT_PAGE_SIZE,
    Pagination,
    QueryResult,
    RequestParameters,
    SortDirection,
    Sorting,
    total_pages,
)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

class TestPagination:
    def test_defaults(self):
        p = Pagination()
        assert p.page == 1
        assert p.page_size == DEFAULT_PAGE_SIZE == 10

    def test_offset(self):
        assert Pagination(page=1, page_size=10).offset == 0
        assert Pagination(page=3, page_size=25).offset == 50

    def test_first_keeps_page_size(self):
        assert Pagination(page=7, page_size=50).first() == Pagination(page=1, page_size=50)

    def test_page_must_be_positive(self):
        with pytest.raises(ValueError):
            Pagination(page=0)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            Pagination(page=1, page_size=0)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Pagination().page = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

class TestSorting:
    def test_default_direction_is_ascending(self):
        assert Sorting("name").direction is SortDirection.ASC

    def test_direction_values(self):
        assert SortDirection.ASC.value == "asc"
        assert SortDirection.DESC.value == "desc"
        assert SortDirection("desc") is SortDirection.DESC

    def test_flipped(self):
        assert SortDirection.ASC.flipped() is SortDirection.DESC
        assert SortDirection.DESC.flipped() is SortDirection.ASC

    def test_toggled_same_field(self):
        assert Sorting("name").toggled("name") == Sorting("name", SortDirection.DESC)
        assert Sorting("name", SortDirection.DESC).toggled("name") == Sorting("name")

    def test_toggled_other_field(self):
        assert Sorting("name", SortDirection.DESC).toggled("status") == Sorting("status")


# ---------------------------------------------------------------------------
# RequestParameters
# ---------------------------------------------------------------------------

class TestRequestParameters:
    def test_offset(self):
        assert RequestParameters(page=2, page_size=20).offset == 20

    def test_equality_by_value(self):
        a = RequestParameters(page=1, page_size=10, filters={"x": 1}, sorting=Sorting("name"))
        b = RequestParameters(page=1, page_size=10, filters={"x": 1}, sorting=Sorting("name"))
        assert a == b

    def test_as_dict(self):
        params = RequestParameters(
            page=2,
            page_size=25,
            filters={"status": "active"},
            sorting=Sorting("name", SortDirection.DESC),
            global_filter="acme",
        )
        assert params.as_dict() == {
            "page": 2,
            "page_size": 25,
            "filters": {"status": "active"},
            "sorting": {"field": "name", "direction": "desc"},
            "global_filter": "acme",
        }

    def test_as_dict_without_sorting(self):
        assert RequestParameters(page=1, page_size=10).as_dict()["sorting"] is None


# ---------------------------------------------------------------------------
# total_pages / QueryResult
# ---------------------------------------------------------------------------

class TestTotalPages:
    @pytest.mark.parametrize(
        ("total", "page_size", "expected"),
        [(25, 10, 3), (0, 10, 0), (10, 10, 1), (11, 10, 2), (1, 50, 1), (-3, 10, 0)],
    )
    def test_ceil_division(self, total, page_size, expected):
        assert total_pages(total, page_size) == expected


class TestQueryResult:
    def test_empty(self):
        result = QueryResult.empty()
        assert result.items == []
        assert result.total == 0

    def test_map_keeps_total(self):
        result = QueryResult(items=[1, 2, 3], total=30).map(lambda n: n * 10)
        assert result.items == [10, 20, 30]
        assert result.total == 30
