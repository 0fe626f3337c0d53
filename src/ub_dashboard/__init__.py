"""
ub_dashboard – Union-benefits dashboard client core.

Import path convention::

    from ub_dashboard.application.table import TableQueryController, QueryOptions
    from ub_dashboard.application.pagination import Pagination, Sorting, SortDirection
    from ub_dashboard.adapters.backend import BackendApiClient
    from ub_dashboard.ledger import parse_ledger_entry, LedgerFilters
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
