"""Pytest configuration and shared fixtures.

This module provides:
- Fakes for the counter source, the scheduler and the clock
- A controller wired to those fakes
- Pytest markers for test categorization (unit, integration, macos_only)
"""
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from app.controller import ModeController
from app.dependencies import AppDependencies
from app.events import EventBus, EventType
from storage.settings import SettingsManager
from tests.mocks import FixedClock, ManualScheduler, MockCounterSource


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: mark test as a unit test (fast, isolated)")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "macos_only: mark test as requiring macOS")


# =============================================================================
# Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_data_dir: Path) -> SettingsManager:
    """Settings manager writing into a temporary directory."""
    return SettingsManager(temp_data_dir)


# =============================================================================
# Fakes
# =============================================================================


@pytest.fixture
def counter_source() -> MockCounterSource:
    return MockCounterSource()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded_events(event_bus: EventBus) -> list:
    """Every event published on ``event_bus``, in order."""
    events = []
    for event_type in EventType:
        event_bus.subscribe(event_type, events.append)
    return events


@pytest.fixture
def deps(counter_source, scheduler, event_bus) -> AppDependencies:
    return AppDependencies(
        counter_source=counter_source,
        scheduler=scheduler,
        event_bus=event_bus,
    )


@pytest.fixture
def controller(deps, clock) -> Generator[ModeController, None, None]:
    """A controller wired to the fakes (not yet started)."""
    ctrl = ModeController(deps, clock=clock)
    yield ctrl
    ctrl.shutdown()


@pytest.fixture
def mock_psutil() -> Generator[dict, None, None]:
    """Patch psutil's per-interface counters and interface status."""
    with patch("monitor.counters.psutil.net_io_counters") as mock_io, \
            patch("monitor.counters.psutil.net_if_stats") as mock_stats:
        mock_io.return_value = {
            "en0": MagicMock(bytes_recv=5000, bytes_sent=1000),
            "en1": MagicMock(bytes_recv=300, bytes_sent=200),
            "lo0": MagicMock(bytes_recv=90000, bytes_sent=90000),
        }
        mock_stats.return_value = {
            "en0": MagicMock(isup=True),
            "en1": MagicMock(isup=True),
            "lo0": MagicMock(isup=True),
        }
        yield {"io": mock_io, "stats": mock_stats}
