"""Observability – structured logging helpers."""
from ub_dashboard.observability.logging.factory import JsonLoggerFactory
from ub_dashboard.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
