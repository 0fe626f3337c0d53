"""Application debounce – generic keyed debounce primitive."""
from ub_dashboard.application.debounce.debouncer import Debouncer

__all__ = ["Debouncer"]
