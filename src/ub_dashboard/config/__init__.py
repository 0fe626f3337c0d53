"""Config – 12-factor settings and loaders."""

from ub_dashboard.config.settings import (
    BackendApiSettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    TableSettings,
)
from ub_dashboard.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "BackendApiSettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TableSettings",
]
