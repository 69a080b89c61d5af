"""Configuration module for Speedy.

Provides centralized constants, logging and exceptions.
"""
from config.constants import (
    APP,
    HISTORY,
    INTERVALS,
    NETWORK,
    STORAGE,
    UI,
    AppInfo,
    HistoryConfig,
    Intervals,
    NetworkConfig,
    StorageConfig,
    UIConfig,
)
from config.exceptions import (
    ConfigurationError,
    CounterReadError,
    SchedulerError,
    SpeedyError,
)
from config.logging_config import LogContext, get_logger, setup_logging

__all__ = [
    # Constants
    "APP",
    "HISTORY",
    "INTERVALS",
    "NETWORK",
    "STORAGE",
    "UI",
    "AppInfo",
    "HistoryConfig",
    "Intervals",
    "NetworkConfig",
    "StorageConfig",
    "UIConfig",
    # Exceptions
    "SpeedyError",
    "CounterReadError",
    "ConfigurationError",
    "SchedulerError",
    # Logging
    "LogContext",
    "setup_logging",
    "get_logger",
]
