"""Config – environment-driven settings for the logging layer."""
from accesslog.config.settings import EnvSettingsLoader, LoggingSettings, Settings, SettingsLoader
from accesslog.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LoggingSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
