"""Config settings – 12-factor env-based configuration."""
from stackforge.config.settings.base import Settings, StackforgeSettings
from stackforge.config.settings.loaders import EnvSettingsLoader, SettingsLoader, load_settings

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader", "StackforgeSettings", "load_settings"]
