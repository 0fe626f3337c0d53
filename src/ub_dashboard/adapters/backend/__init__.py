"""Backend adapter – benefits REST API list endpoints."""
from ub_dashboard.adapters.backend.client import (
    LEDGER_ENTRIES_PATH,
    LEDGER_ENTRY_TYPES_PATH,
    RESOURCE_PATHS,
    BackendApiClient,
    LedgerEntryTypeOption,
    parse_envelope,
)

__all__ = [
    "BackendApiClient",
    "LEDGER_ENTRIES_PATH",
    "LEDGER_ENTRY_TYPES_PATH",
    "LedgerEntryTypeOption",
    "RESOURCE_PATHS",
    "parse_envelope",
]
