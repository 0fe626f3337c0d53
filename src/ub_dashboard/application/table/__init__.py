"""Application table – list-view query controller."""
from ub_dashboard.application.table.controller import (
    DEFAULT_DEBOUNCE_MS,
    QueryFn,
    TableQueryController,
)
from ub_dashboard.application.table.options import QueryOptions

__all__ = ["DEFAULT_DEBOUNCE_MS", "QueryFn", "QueryOptions", "TableQueryController"]
