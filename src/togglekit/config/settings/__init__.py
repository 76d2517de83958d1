"""Config settings – 12-factor env-based configuration."""
from togglekit.config.settings.base import Settings, TogglekitSettings
from togglekit.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader", "TogglekitSettings"]
