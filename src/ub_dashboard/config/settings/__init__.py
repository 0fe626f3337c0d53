"""Config settings – 12-factor env-based configuration."""
from ub_dashboard.config.settings.base import Settings
from ub_dashboard.config.settings.dashboard import BackendApiSettings, TableSettings
from ub_dashboard.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["BackendApiSettings", "EnvSettingsLoader", "Settings", "SettingsLoader", "TableSettings"]
