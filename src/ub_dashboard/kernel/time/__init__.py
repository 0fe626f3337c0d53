"""Kernel time – Clock port + implementations."""
from ub_dashboard.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
