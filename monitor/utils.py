"""Formatting helpers for the status bar title and the history rows.

Example:
    >>> from monitor.utils import format_bytes_per_second
    >>> format_bytes_per_second(2048)
    '2.0 KB/s'
"""

from __future__ import annotations

from typing import List, Sequence, Union

from config import HISTORY, UI

# Type alias for numeric values
NumericValue = Union[int, float]

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(bytes_value: NumericValue) -> str:
    """Format bytes to a human-readable string.

    Uses 1024 as the base and the largest unit that keeps the value below
    1024, capped at TB. Plain bytes get no decimals, every other unit one.

    Examples:
        >>> format_bytes(0)
        '0 B'
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(1024 ** 5)
        '1024.0 TB'
    """
    value = float(bytes_value)
    unit_index = 0
    while value >= 1024.0 and unit_index < len(BYTE_UNITS) - 1:
        value /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{value:.0f} {BYTE_UNITS[0]}"
    return f"{value:.1f} {BYTE_UNITS[unit_index]}"


def format_bytes_per_second(bytes_value: NumericValue) -> str:
    """Format a byte rate, e.g. ``'1.5 MB/s'``."""
    return f"{format_bytes(bytes_value)}/s"


def format_title(rx_bytes: NumericValue, tx_bytes: NumericValue) -> str:
    """Format the status bar title for one sample.

    Both directions are shown in whole kilobytes. The title is left-padded
    with figure spaces so that two three-digit values and two one-digit
    values take the same width.

    Examples:
        >>> format_title(102400, 51200)
        '\\u2007↓100KB ↑50KB'
    """
    rx_str = f"{rx_bytes / 1024:.0f}"
    tx_str = f"{tx_bytes / 1024:.0f}"
    padding = (UI.TITLE_PAD_DIGITS - len(rx_str)) + (UI.TITLE_PAD_DIGITS - len(tx_str))
    return f"{UI.FIGURE_SPACE * max(padding, 0)}↓{rx_str}KB ↑{tx_str}KB"


def format_history_row(sample) -> str:
    """Format one menu row: ``'14:03:07  ↓ 2.0 KB/s  ↑ 512 B/s'``."""
    time_str = sample.timestamp.strftime(UI.TIME_FORMAT)
    down = format_bytes_per_second(sample.rx_bytes_per_second)
    up = format_bytes_per_second(sample.tx_bytes_per_second)
    return f"{time_str}  ↓ {down}  ↑ {up}"


def format_history_rows(samples: Sequence, max_rows: int = HISTORY.MAX_LOG_ENTRIES) -> List[str]:
    """Format exactly ``max_rows`` rows from samples given newest first.

    Rows without a sample are rendered as ``'-'``.
    """
    rows = [format_history_row(s) for s in list(samples)[:max_rows]]
    rows.extend(UI.EMPTY_ROW for _ in range(max_rows - len(rows)))
    return rows


__all__ = [
    "BYTE_UNITS",
    "NumericValue",
    "format_bytes",
    "format_bytes_per_second",
    "format_history_row",
    "format_history_rows",
    "format_title",
]
