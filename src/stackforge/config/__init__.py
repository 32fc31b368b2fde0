"""Config – 12-factor settings and their loaders."""

from stackforge.config.settings import (
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    StackforgeSettings,
    load_settings,
)
from stackforge.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "StackforgeSettings",
    "load_settings",
]
