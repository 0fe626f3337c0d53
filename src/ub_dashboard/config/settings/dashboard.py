"""Config settings – list-table and backend API settings."""
from __future__ import annotations

import dataclasses

from ub_dashboard.config.settings.base import Settings
from ub_dashboard.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class TableSettings(Settings):
    """Defaults shared by every list view (``TABLE_*`` env vars)."""

    _prefix = "TABLE"

    page_size: int = 10
    debounce_ms: int = 300
    stale_time: float = 0.0
    retry: int = 0
    retry_delay: float = 1.0
    keep_previous_data: bool = False

    def _validate(self) -> None:
        if self.page_size < 1:
            raise InvalidSettingValueError("page_size", self.page_size, "must be >= 1")
        if self.debounce_ms < 0:
            raise InvalidSettingValueError("debounce_ms", self.debounce_ms, "must be >= 0")
        if self.stale_time < 0:
            raise InvalidSettingValueError("stale_time", self.stale_time, "must be >= 0")
        if self.retry < 0:
            raise InvalidSettingValueError("retry", self.retry, "must be >= 0")


@dataclasses.dataclass
class BackendApiSettings(Settings):
    """Backend REST API location (``BACKEND_API_*`` env vars)."""

    _prefix = "BACKEND_API"

    url: str = "http://localhost:8000"
    timeout: float = 10.0
    max_attempts: int = 1

    def _validate(self) -> None:
        if not self.url.startswith(("http://", "https://")):
            raise InvalidSettingValueError("url", self.url, "must be an http(s) URL")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be > 0")
        if self.max_attempts < 1:
            raise InvalidSettingValueError("max_attempts", self.max_attempts, "must be >= 1")


__all__ = ["BackendApiSettings", "TableSettings"]
