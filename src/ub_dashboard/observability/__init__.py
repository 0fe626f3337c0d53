"""Observability – structured logging."""

from ub_dashboard.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
