"""Config – 12-factor settings and loaders."""

from togglekit.config.settings import (
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    TogglekitSettings,
)
from togglekit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


def load_settings() -> TogglekitSettings:
    """Read :class:`TogglekitSettings` from the process environment."""
    return EnvSettingsLoader().load(TogglekitSettings)


__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TogglekitSettings",
    "load_settings",
]
