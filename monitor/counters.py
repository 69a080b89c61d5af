"""Cumulative network byte counters using psutil.

The counter source sums the bytes received and transmitted since boot over
every interface that is up, except the loopback interface. It never raises:
when the interfaces cannot be enumerated it reports zero totals, which shows
up as a single ``0 KB`` tick rather than an error.

Example:
    >>> source = CounterSource()
    >>> totals = source.read_totals()
    >>> print(totals.rx_bytes_total, totals.tx_bytes_total)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import psutil

from config import NETWORK, CounterReadError, get_logger

logger = get_logger(__name__)

COUNTER_MASK = (1 << NETWORK.COUNTER_BITS) - 1


@dataclass(frozen=True)
class CounterSnapshot:
    """Total bytes received/transmitted since boot.

    Values are unsigned 64-bit; anything outside that range is reduced
    modulo 2**64 on construction.

    Attributes:
        rx_bytes_total: Bytes received across all counted interfaces.
        tx_bytes_total: Bytes transmitted across all counted interfaces.
    """

    rx_bytes_total: int = 0
    tx_bytes_total: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rx_bytes_total", int(self.rx_bytes_total) & COUNTER_MASK)
        object.__setattr__(self, "tx_bytes_total", int(self.tx_bytes_total) & COUNTER_MASK)

    def as_tuple(self) -> Tuple[int, int]:
        return self.rx_bytes_total, self.tx_bytes_total


ZERO_SNAPSHOT = CounterSnapshot(0, 0)


class CounterSource:
    """Reads per-interface counters and sums the active ones.

    Attributes:
        loopback: Name of the interface excluded from the totals.
    """

    def __init__(self, loopback: str = NETWORK.LOOPBACK_INTERFACE) -> None:
        self.loopback = loopback

    def _read_interfaces(self) -> Tuple[Dict[str, object], Dict[str, object]]:
        """Get raw psutil counters and interface status.

        Raises:
            CounterReadError: If psutil cannot enumerate the interfaces.
        """
        try:
            counters = psutil.net_io_counters(pernic=True)
            stats = psutil.net_if_stats()
        except (OSError, RuntimeError, psutil.Error) as e:
            raise CounterReadError(
                "Could not enumerate network interfaces",
                {"error": f"{type(e).__name__}: {e}"},
            ) from e
        return counters or {}, stats or {}

    def read_totals(self) -> CounterSnapshot:
        """Get total bytes received and transmitted since boot.

        Interfaces that are down, unknown to ``net_if_stats`` or named like the
        loopback interface are skipped.

        Returns:
            CounterSnapshot of the summed totals, or zero totals on failure.
        """
        try:
            counters, stats = self._read_interfaces()
        except CounterReadError as e:
            logger.warning(f"Counter read failed, reporting zero totals: {e}")
            return ZERO_SNAPSHOT

        rx_total = 0
        tx_total = 0
        for name, io in counters.items():
            if name == self.loopback:
                continue
            status = stats.get(name)
            if status is None or not status.isup:
                continue
            rx_total += io.bytes_recv
            tx_total += io.bytes_sent

        return CounterSnapshot(rx_total, tx_total)


__all__ = ["COUNTER_MASK", "CounterSnapshot", "CounterSource", "ZERO_SNAPSHOT"]
