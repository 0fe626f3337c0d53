"""Ledger – member fund ledger entries, filters and row expansion."""
from ub_dashboard.ledger.entries import (
    Account,
    AccountContributionLedgerEntry,
    AccountType,
    AdminFeeLedgerEntry,
    AnnuityPayoutLedgerEntry,
    AnnuityUpdateLedgerEntry,
    ClaimLedgerEntry,
    GenericLedgerEntry,
    InsurancePremiumLedgerEntry,
    LedgerEntry,
    LedgerEntryType,
    ManualAdjustmentLedgerEntry,
    MemberContributionLedgerEntry,
    display_name,
    entry_details,
    format_money,
    parse_ledger_entry,
)
from ub_dashboard.ledger.expansion import ExpandedEntries
from ub_dashboard.ledger.filters import DateRangePreset, LedgerFilters, date_range, page_offset

__all__ = [
    "Account",
    "AccountContributionLedgerEntry",
    "AccountType",
    "AdminFeeLedgerEntry",
    "AnnuityPayoutLedgerEntry",
    "AnnuityUpdateLedgerEntry",
    "ClaimLedgerEntry",
    "DateRangePreset",
    "ExpandedEntries",
    "GenericLedgerEntry",
    "InsurancePremiumLedgerEntry",
    "LedgerEntry",
    "LedgerEntryType",
    "LedgerFilters",
    "ManualAdjustmentLedgerEntry",
    "MemberContributionLedgerEntry",
    "date_range",
    "display_name",
    "entry_details",
    "format_money",
    "page_offset",
    "parse_ledger_entry",
]
