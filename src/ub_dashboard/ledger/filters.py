"""Ledger – member ledger filters and date-range presets."""
from __future__ import annotations

import calendar
import dataclasses
from datetime import date
from enum import Enum
from typing import Any, Mapping

from ub_dashboard.kernel.time import Clock, SystemClock

ALL = "all"


class DateRangePreset(str, Enum):
    ALL = "all"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    THIS_YEAR = "this-year"
    LAST_YEAR = "last-year"


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def date_range(preset: DateRangePreset | str, today: date) -> tuple[date | None, date | None]:
    """Inclusive ``(start, end)`` for *preset* relative to *today*; ``(None, None)`` for all time."""
    preset = DateRangePreset(preset)
    if preset is DateRangePreset.THIS_MONTH:
        return _month_bounds(today.year, today.month)
    if preset is DateRangePreset.LAST_MONTH:
        if today.month == 1:
            return _month_bounds(today.year - 1, 12)
        return _month_bounds(today.year, today.month - 1)
    if preset is DateRangePreset.THIS_YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if preset is DateRangePreset.LAST_YEAR:
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    return None, None


@dataclasses.dataclass(frozen=True)
class LedgerFilters:
    """Filter bar state of a member's fund ledger.

    ``account_type`` and ``entry_type`` use ``"all"`` for no restriction.
    """

    account_type: str = ALL
    entry_type: str = ALL
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "LedgerFilters":
        """Read filters as stored in a table controller's filter map."""
        return cls(
            account_type=values.get("account_type") or ALL,
            entry_type=values.get("entry_type") or ALL,
            start_date=_optional_date(values.get("start_date")),
            end_date=_optional_date(values.get("end_date")),
        )

    def with_date_range(self, preset: DateRangePreset | str, clock: Clock | None = None) -> "LedgerFilters":
        start, end = date_range(preset, (clock or SystemClock()).today())
        return dataclasses.replace(self, start_date=start, end_date=end)

    def as_filters(self) -> dict[str, Any]:
        """Entries for ``TableQueryController.set_filters``."""
        return {
            "account_type": self.account_type,
            "entry_type": self.entry_type,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }

    def to_params(self) -> dict[str, str]:
        """Backend query-string parameters; unrestricted filters are omitted."""
        params: dict[str, str] = {}
        if self.account_type and self.account_type != ALL:
            params["account_type"] = self.account_type.upper()
        if self.entry_type and self.entry_type != ALL:
            params["entry_type"] = self.entry_type
        if self.start_date:
            params["start_date"] = self.start_date.isoformat()
        if self.end_date:
            params["end_date"] = self.end_date.isoformat()
        return params


def _optional_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


__all__ = ["ALL", "DateRangePreset", "LedgerFilters", "date_range", "page_offset"]
