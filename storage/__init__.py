"""Preference persistence."""

from .settings import (
    DEFAULT_UPDATE_MODE,
    AppSettings,
    SettingsManager,
    UpdateMode,
    get_settings_manager,
)

__all__ = [
    "DEFAULT_UPDATE_MODE",
    "AppSettings",
    "SettingsManager",
    "UpdateMode",
    "get_settings_manager",
]
