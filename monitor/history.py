"""Rolling history of recent throughput samples."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional

from config import HISTORY


@dataclass(frozen=True)
class Sample:
    """One tick's throughput.

    Attributes:
        timestamp: When the sample was taken.
        rx_bytes_per_second: Bytes received during the tick.
        tx_bytes_per_second: Bytes transmitted during the tick.
    """

    timestamp: datetime
    rx_bytes_per_second: int
    tx_bytes_per_second: int


class SampleHistory:
    """Fixed-capacity FIFO of samples, oldest first.

    Appending past capacity drops the oldest samples.

    Example:
        >>> history = SampleHistory()
        >>> history.append(Sample(datetime.now(), 1024, 512))
        >>> history.snapshot_newest_first(5)
    """

    def __init__(self, capacity: int = HISTORY.MAX_LOG_ENTRIES):
        self._samples: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    def append(self, sample: Sample) -> None:
        self._samples.append(sample)

    def snapshot_newest_first(self, n: int = HISTORY.MAX_LOG_ENTRIES) -> List[Sample]:
        """Get up to ``n`` most recent samples, newest first."""
        if n <= 0:
            return []
        newest = list(reversed(self._samples))
        return newest[:n]

    def latest(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(list(self._samples))


__all__ = ["Sample", "SampleHistory"]
