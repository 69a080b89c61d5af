"""Centralized constants and configuration for Speedy.

All magic numbers and strings used by the sampler, the controller and the
menu live here so the rest of the code reads in terms of names.

Usage:
    from config.constants import INTERVALS, HISTORY, UI

    period = INTERVALS.SAMPLE_SECONDS
    capacity = HISTORY.MAX_LOG_ENTRIES
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Intervals:
    """Time intervals (in seconds)."""
    # Background sampler (continuous mode)
    SAMPLE_SECONDS: float = 1.0

    # Menu-only timer, runs while the menu is open
    MENU_REFRESH_SECONDS: float = 1.0

    # One-shot timer that installs the real timers after rumps.run()
    STARTUP_DELAY_SECONDS: float = 0.5


@dataclass(frozen=True)
class HistoryConfig:
    """Rolling sample history."""
    MAX_LOG_ENTRIES: int = 20


@dataclass(frozen=True)
class NetworkConfig:
    """Network counter configuration."""
    # Excluded from the totals (localhost traffic)
    LOOPBACK_INTERFACE: str = "lo0"

    # Counters are treated as unsigned integers of this width
    COUNTER_BITS: int = 64


@dataclass(frozen=True)
class UIConfig:
    """Status bar title and menu labels."""
    PLACEHOLDER_TITLE: str = "↓↑"
    FIGURE_SPACE: str = "\u2007"
    TITLE_PAD_DIGITS: int = 3
    TITLE_FONT_SIZE: float = 13.0

    TIME_FORMAT: str = "%H:%M:%S"
    EMPTY_ROW: str = "-"

    HISTORY_HEADER: str = "Recent Traffic"
    MODE_HEADER: str = "Mode"
    MODE_PAUSED: str = "Paused"
    MODE_CONTINUOUS: str = "Continuous Updates"
    MODE_ON_DEMAND: str = "Update When Opened"
    QUIT: str = "Quit"


@dataclass(frozen=True)
class StorageConfig:
    """Storage and file-related configuration."""
    DATA_DIR_NAME: str = ".speedy"
    SETTINGS_FILE: str = "settings.json"
    LOG_FILE: str = "speedy.log"

    # Log rotation
    LOG_MAX_BYTES: int = 1_000_000  # 1MB
    LOG_BACKUP_COUNT: int = 3


@dataclass(frozen=True)
class AppInfo:
    """Name the status item registers under."""
    NAME: str = "Speedy"


# Global instances - import these
INTERVALS = Intervals()
HISTORY = HistoryConfig()
NETWORK = NetworkConfig()
UI = UIConfig()
STORAGE = StorageConfig()
APP = AppInfo()
