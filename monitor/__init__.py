"""Network sampling components.

Modules:
    counters: Cumulative byte counters from psutil
    delta: Per-tick deltas and calibration
    history: Rolling sample history
    utils: Title and row formatting

Example:
    >>> from monitor import CounterSource, DeltaEngine
    >>> engine = DeltaEngine(CounterSource())
    >>> engine.calibrate()
    >>> rx, tx = engine.sample()
"""
from .counters import CounterSnapshot, CounterSource
from .delta import DeltaEngine, compute_delta
from .history import Sample, SampleHistory
from .utils import (
    format_bytes,
    format_bytes_per_second,
    format_history_row,
    format_history_rows,
    format_title,
)

__all__ = [
    # Counters
    "CounterSnapshot",
    "CounterSource",
    # Deltas
    "DeltaEngine",
    "compute_delta",
    # History
    "Sample",
    "SampleHistory",
    # Formatting
    "format_bytes",
    "format_bytes_per_second",
    "format_history_row",
    "format_history_rows",
    "format_title",
]
