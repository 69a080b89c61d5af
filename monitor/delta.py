"""Per-second deltas from cumulative byte counters.

The engine keeps the previous reading (the baseline) and subtracts it from
each new one. Subtraction wraps like unsigned 64-bit arithmetic: a counter
that resets (sleep/wake, interface restart) yields a huge bogus value for one
tick instead of an error.

Example:
    >>> engine = DeltaEngine(CounterSource())
    >>> engine.calibrate()
    >>> rx, tx = engine.sample()
"""

from __future__ import annotations

from typing import Tuple

from config import get_logger
from monitor.counters import COUNTER_MASK, ZERO_SNAPSHOT, CounterSnapshot

logger = get_logger(__name__)


def compute_delta(previous: CounterSnapshot, current: CounterSnapshot) -> Tuple[int, int]:
    """Get ``current - previous`` for both directions, modulo 2**64.

    Examples:
        >>> compute_delta(CounterSnapshot(100, 50), CounterSnapshot(300, 80))
        (200, 30)
        >>> compute_delta(CounterSnapshot(1000, 1000), CounterSnapshot(10, 10))
        (18446744073709550626, 18446744073709550626)
    """
    rx_delta = (current.rx_bytes_total - previous.rx_bytes_total) & COUNTER_MASK
    tx_delta = (current.tx_bytes_total - previous.tx_bytes_total) & COUNTER_MASK
    return rx_delta, tx_delta


class DeltaEngine:
    """Turns successive counter readings into deltas.

    Every call to :meth:`sample` replaces the baseline with the reading it
    just used, so callers never touch the baseline directly.
    """

    def __init__(self, counter_source) -> None:
        self._source = counter_source
        self._last: CounterSnapshot = ZERO_SNAPSHOT

    @property
    def last_counters(self) -> CounterSnapshot:
        """The baseline the next delta is computed against."""
        return self._last

    def calibrate(self) -> CounterSnapshot:
        """Align the baseline with the current totals.

        The first sample after calibration covers only the time since this
        call, so a mode switch never reports a spike.
        """
        self._last = self._source.read_totals()
        logger.debug(f"Calibrated counters: rx={self._last.rx_bytes_total} tx={self._last.tx_bytes_total}")
        return self._last

    def sample(self) -> Tuple[int, int]:
        """Read the counters and return (rx_delta, tx_delta) since the baseline."""
        current = self._source.read_totals()
        delta = compute_delta(self._last, current)
        self._last = current
        return delta


__all__ = ["DeltaEngine", "compute_delta"]
