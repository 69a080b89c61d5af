"""Tests for monitor/utils.py"""
from datetime import datetime

from monitor.history import Sample
from monitor.utils import (
    format_bytes,
    format_bytes_per_second,
    format_history_row,
    format_history_rows,
    format_title,
)

FIGURE_SPACE = "\u2007"


class TestFormatBytes:
    """Tests for the format_bytes function."""

    def test_format_zero_bytes(self):
        assert format_bytes(0) == "0 B"

    def test_bytes_have_no_decimals(self):
        assert format_bytes(512) == "512 B"
        assert format_bytes(1023) == "1023 B"

    def test_format_kilobytes(self):
        assert format_bytes(1024) == "1.0 KB"
        assert format_bytes(1536) == "1.5 KB"

    def test_format_megabytes(self):
        assert format_bytes(1024 * 1024) == "1.0 MB"

    def test_format_gigabytes(self):
        assert format_bytes(1024 ** 3) == "1.0 GB"

    def test_format_terabytes(self):
        assert format_bytes(1024 ** 4) == "1.0 TB"

    def test_capped_at_terabytes(self):
        assert format_bytes(1024 ** 5) == "1024.0 TB"


class TestFormatBytesPerSecond:
    """Tests for byte-rate formatting."""

    def test_bytes(self):
        assert format_bytes_per_second(512) == "512 B/s"

    def test_kilobytes(self):
        assert format_bytes_per_second(2048) == "2.0 KB/s"

    def test_megabytes(self):
        assert format_bytes_per_second(1_572_864) == "1.5 MB/s"

    def test_zero(self):
        assert format_bytes_per_second(0) == "0 B/s"


class TestFormatTitle:
    """Tests for the status bar title."""

    def test_three_digit_values_have_no_padding(self):
        assert format_title(100 * 1024, 200 * 1024) == "↓100KB ↑200KB"

    def test_padding_fills_missing_digits(self):
        assert format_title(102400, 51200) == FIGURE_SPACE + "↓100KB ↑50KB"

    def test_idle_title(self):
        assert format_title(0, 0) == FIGURE_SPACE * 4 + "↓0KB ↑0KB"

    def test_rounds_to_whole_kilobytes(self):
        assert format_title(1000, 300) == FIGURE_SPACE * 4 + "↓1KB ↑0KB"

    def test_long_values_clamp_padding(self):
        # 5 digits + 1 digit: padding would be -2 + 2 = 0
        assert format_title(10000 * 1024, 2 * 1024) == "↓10000KB ↑2KB"

    def test_long_values_never_negative_padding(self):
        title = format_title(123456 * 1024, 654321 * 1024)
        assert title == "↓123456KB ↑654321KB"

    def test_width_is_stable_for_short_values(self):
        assert len(format_title(1024, 1024)) == len(format_title(999 * 1024, 999 * 1024))


class TestHistoryRows:
    """Tests for menu row formatting."""

    def test_single_row(self):
        sample = Sample(datetime(2026, 1, 20, 14, 3, 7), 2048, 512)
        assert format_history_row(sample) == "14:03:07  ↓ 2.0 KB/s  ↑ 512 B/s"

    def test_rows_padded_with_dashes(self):
        sample = Sample(datetime(2026, 1, 20, 8, 5, 9), 0, 0)
        rows = format_history_rows([sample], max_rows=4)
        assert rows == ["08:05:09  ↓ 0 B/s  ↑ 0 B/s", "-", "-", "-"]

    def test_empty_history(self):
        assert format_history_rows([], max_rows=20) == ["-"] * 20

    def test_rows_truncated_to_max(self):
        samples = [Sample(datetime(2026, 1, 20, 10, 0, s), s, s) for s in range(5)]
        rows = format_history_rows(samples, max_rows=2)
        assert len(rows) == 2
        assert rows[0].startswith("10:00:00")
        assert rows[1].startswith("10:00:01")
