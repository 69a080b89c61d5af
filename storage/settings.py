"""Settings persistence for Speedy.

Only preferences are stored here (the last selected update mode and the
debug logging switch). Samples are never written to disk.
"""
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from config import STORAGE, ConfigurationError, get_logger

logger = get_logger(__name__)


class UpdateMode(Enum):
    """How the status bar title and the history rows are refreshed."""
    PAUSED = "paused"           # Freeze the current list, no sampling
    CONTINUOUS = "continuous"   # Sample in the background, menu open or not
    ON_DEMAND = "on_demand"     # Fresh list sampled only while the menu is open

    @classmethod
    def parse(cls, value: str) -> 'UpdateMode':
        """Get the mode for a stored value.

        Raises:
            ConfigurationError: If the value names no mode.
        """
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError("Unknown update mode", {"value": value}) from None


DEFAULT_UPDATE_MODE = UpdateMode.CONTINUOUS


@dataclass
class AppSettings:
    """Application settings."""
    update_mode: str = DEFAULT_UPDATE_MODE.value
    debug_logging: bool = False

    def to_dict(self) -> dict:
        return {
            "update_mode": self.update_mode,
            "debug_logging": self.debug_logging,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AppSettings':
        return cls(
            update_mode=data.get("update_mode", DEFAULT_UPDATE_MODE.value),
            debug_logging=bool(data.get("debug_logging", False)),
        )


class SettingsManager:
    """Loads and saves settings.json in the data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self.settings_file = data_dir / STORAGE.SETTINGS_FILE
        self._settings: AppSettings = AppSettings()
        self._load()

    def _load(self) -> None:
        if not self.settings_file.exists():
            self._settings = AppSettings()
            return
        try:
            with open(self.settings_file, 'r') as f:
                self._settings = AppSettings.from_dict(json.load(f))
        except (json.JSONDecodeError, OSError, AttributeError) as e:
            logger.warning(f"Could not load settings, using defaults: {e}")
            self._settings = AppSettings()

    def _save(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w') as f:
                json.dump(self._settings.to_dict(), f, indent=2)
        except OSError as e:
            logger.error(f"Error saving settings to {self.settings_file}: {e}")

    # === Update Mode ===

    def get_update_mode(self) -> UpdateMode:
        """Get the remembered update mode, or the default if it is invalid."""
        try:
            return UpdateMode.parse(self._settings.update_mode)
        except ConfigurationError as e:
            logger.warning(f"{e}; falling back to {DEFAULT_UPDATE_MODE.value}")
            return DEFAULT_UPDATE_MODE

    def set_update_mode(self, mode: UpdateMode) -> None:
        if self._settings.update_mode == mode.value:
            return
        self._settings.update_mode = mode.value
        self._save()

    # === Logging ===

    def get_debug_logging(self) -> bool:
        return self._settings.debug_logging


def get_settings_manager(data_dir: Optional[Path] = None) -> SettingsManager:
    """Create a settings manager for ``data_dir`` (default ~/.speedy)."""
    if data_dir is None:
        data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    return SettingsManager(data_dir)
