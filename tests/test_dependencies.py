"""Tests for app/dependencies.py - Dependency injection container."""

from unittest.mock import MagicMock

from app.dependencies import AppDependencies, create_dependencies
from app.events import EventBus
from app.timer import MenuAwareScheduler
from monitor.counters import CounterSource
from storage.settings import SettingsManager


class TestAppDependencies:
    """Tests for the AppDependencies dataclass."""

    def test_basic_creation(self):
        """Test creating AppDependencies with mock objects."""
        mock_source = MagicMock()
        mock_scheduler = MagicMock()

        deps = AppDependencies(counter_source=mock_source, scheduler=mock_scheduler)

        assert deps.counter_source is mock_source
        assert deps.scheduler is mock_scheduler

    def test_optional_fields_default_to_none(self):
        deps = AppDependencies(counter_source=MagicMock(), scheduler=MagicMock())
        assert deps.settings is None
        assert deps.event_bus is None


class TestCreateDependencies:
    """Tests for the production factory."""

    def test_creates_real_components(self, temp_data_dir):
        deps = create_dependencies(data_dir=temp_data_dir)

        assert isinstance(deps.counter_source, CounterSource)
        assert isinstance(deps.scheduler, MenuAwareScheduler)
        assert isinstance(deps.settings, SettingsManager)
        assert isinstance(deps.event_bus, EventBus)

    def test_settings_use_data_dir(self, temp_data_dir):
        deps = create_dependencies(data_dir=temp_data_dir)
        assert deps.settings.data_dir == temp_data_dir

    def test_uses_provided_event_bus(self, temp_data_dir):
        bus = EventBus()
        deps = create_dependencies(data_dir=temp_data_dir, event_bus=bus)
        assert deps.event_bus is bus

    def test_scheduler_starts_empty(self, temp_data_dir):
        deps = create_dependencies(data_dir=temp_data_dir)
        assert deps.scheduler.active_count == 0
