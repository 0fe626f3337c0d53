"""Unit tests for ledger filters, date presets and row expansion."""
from datetime import UTC, date, datetime

import pytest

from ub_dashboard.kernel.time import FrozenClock
from ub_dashboard.ledger import (
    DateRangePreset,
    ExpandedEntries,
    LedgerFilters,
    date_range,
    page_offset,
)


# ---------------------------------------------------------------------------
# date_range
# ---------------------------------------------------------------------------

class TestDateRange:
    @pytest.mark.parametrize(
        ("preset", "today", "expected"),
        [
            ("this-month", date(2026, 2, 10), (date(2026, 2, 1), date(2026, 2, 28))),
            ("last-month", date(2026, 3, 31), (date(2026, 2, 1), date(2026, 2, 28))),
            ("last-month", date(2026, 1, 5), (date(2025, 12, 1), date(2025, 12, 31))),
            ("this-year", date(2026, 7, 4), (date(2026, 1, 1), date(2026, 12, 31))),
            ("last-year", date(2026, 7, 4), (date(2025, 1, 1), date(2025, 12, 31))),
            ("all", date(2026, 7, 4), (None, None)),
        ],
    )
    def test_presets(self, preset, today, expected):
        assert date_range(preset, today) == expected

    def test_leap_february(self):
        assert date_range(DateRangePreset.THIS_MONTH, date(2028, 2, 3))[1] == date(2028, 2, 29)

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            date_range("next-decade", date(2026, 1, 1))


# ---------------------------------------------------------------------------
# LedgerFilters
# ---------------------------------------------------------------------------

class TestLedgerFilters:
    def test_defaults_send_no_params(self):
        assert LedgerFilters().to_params() == {}

    def test_to_params(self):
        filters = LedgerFilters(
            account_type="health",
            entry_type="claim",
            start_date=date(2026, 1, 1),
            end_date=date(2026, 1, 31),
        )
        assert filters.to_params() == {
            "account_type": "HEALTH",
            "entry_type": "claim",
            "start_date": "2026-01-01",
            "end_date": "2026-01-31",
        }

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            LedgerFilters(start_date=date(2026, 2, 1), end_date=date(2026, 1, 1))

    def test_with_date_range_uses_clock(self):
        clock = FrozenClock(datetime(2026, 4, 15, tzinfo=UTC))
        filters = LedgerFilters(entry_type="claim").with_date_range("last-month", clock)
        assert filters.start_date == date(2026, 3, 1)
        assert filters.end_date == date(2026, 3, 31)
        assert filters.entry_type == "claim"

    def test_with_all_clears_dates(self):
        filters = LedgerFilters(start_date=date(2026, 1, 1)).with_date_range(DateRangePreset.ALL)
        assert filters.start_date is None
        assert filters.end_date is None

    def test_mapping_round_trip(self):
        filters = LedgerFilters(account_type="annuity", start_date=date(2026, 1, 1))
        assert LedgerFilters.from_mapping(filters.as_filters()) == filters

    def test_from_mapping_blank_values(self):
        filters = LedgerFilters.from_mapping({"account_type": "", "start_date": "", "entry_type": None})
        assert filters == LedgerFilters()


class TestPageOffset:
    def test_offset(self):
        assert page_offset(1, 10) == 0
        assert page_offset(4, 25) == 75


# ---------------------------------------------------------------------------
# ExpandedEntries
# ---------------------------------------------------------------------------

class TestExpandedEntries:
    def test_toggle(self):
        expanded = ExpandedEntries()
        assert expanded.toggle(5) is True
        assert 5 in expanded
        assert expanded.toggle(5) is False
        assert 5 not in expanded

    def test_independent_rows(self):
        expanded = ExpandedEntries()
        expanded.toggle(9)
        expanded.toggle(2)
        assert list(expanded) == [2, 9]
        assert len(expanded) == 2

    def test_reset(self):
        expanded = ExpandedEntries()
        expanded.toggle(1)
        expanded.reset()
        assert len(expanded) == 0
