"""Config settings – 12-factor env-based configuration."""
from accesslog.config.settings.base import LoggingSettings, Settings
from accesslog.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "LoggingSettings", "Settings", "SettingsLoader"]
