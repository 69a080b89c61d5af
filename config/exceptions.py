"""Custom exception hierarchy for Speedy.

Nothing here is ever shown to the user: the status bar degrades to zero
readings instead. The exceptions exist so internal boundaries can tell a
counter failure from a programming error.
"""

from typing import Optional


class SpeedyError(Exception):
    """Base exception for all Speedy errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class CounterReadError(SpeedyError):
    """Interface byte counters could not be read.

    Raised by the low-level psutil wrapper and absorbed by the counter
    source, which reports zero totals instead.

    Examples:
        >>> raise CounterReadError("net_io_counters failed", {"errno": 1})
    """

    pass


class ConfigurationError(SpeedyError):
    """Invalid configuration or settings value.

    Examples:
        >>> raise ConfigurationError("Unknown update mode", {"value": "turbo"})
    """

    pass


class SchedulerError(SpeedyError):
    """A timer handle was used with a scheduler that did not create it."""

    pass
