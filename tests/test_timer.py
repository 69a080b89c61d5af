"""Tests for app/timer.py - scheduler handles and cancellation."""
import logging

import pytest

from app.timer import MenuAwareScheduler, MenuAwareTimer, TimerHandle
from config import SchedulerError
from tests.mocks import ManualScheduler


class TestScheduler:
    """Tests for the Scheduler base class (via ManualScheduler)."""

    def test_schedule_returns_handle(self, scheduler):
        handle = scheduler.schedule_repeating(1.0, lambda: None, name="background")
        assert isinstance(handle, TimerHandle)
        assert handle.period == 1.0
        assert handle.name == "background"
        assert not handle.cancelled
        assert scheduler.active_count == 1
        assert scheduler.is_active(handle)

    def test_handles_are_unique(self, scheduler):
        first = scheduler.schedule_repeating(1.0, lambda: None)
        second = scheduler.schedule_repeating(1.0, lambda: None)
        assert first.id != second.id

    def test_fire_runs_task(self, scheduler):
        calls = []
        scheduler.schedule_repeating(1.0, lambda: calls.append(1), name="menu")
        scheduler.fire("menu", times=3)
        assert calls == [1, 1, 1]

    def test_cancel(self, scheduler):
        calls = []
        handle = scheduler.schedule_repeating(1.0, lambda: calls.append(1), name="menu")

        scheduler.cancel(handle)

        assert handle.cancelled
        assert scheduler.active_count == 0
        assert not scheduler.is_active(handle)
        scheduler.fire_all()
        assert calls == []

    def test_cancel_twice_is_noop(self, scheduler):
        handle = scheduler.schedule_repeating(1.0, lambda: None)
        scheduler.cancel(handle)
        scheduler.cancel(handle)
        assert scheduler.active_count == 0

    def test_cancel_foreign_handle_raises(self, scheduler):
        other = ManualScheduler()
        handle = other.schedule_repeating(1.0, lambda: None)
        with pytest.raises(SchedulerError):
            scheduler.cancel(handle)
        assert other.is_active(handle)

    def test_cancel_all(self, scheduler):
        scheduler.schedule_repeating(1.0, lambda: None)
        scheduler.schedule_repeating(2.0, lambda: None)
        scheduler.cancel_all()
        assert scheduler.active_count == 0

    def test_is_active_none(self, scheduler):
        assert scheduler.is_active(None) is False

    def test_task_error_is_logged_not_raised(self, scheduler, caplog):
        def failing():
            raise ValueError("boom")

        scheduler.schedule_repeating(1.0, failing, name="bad")
        with caplog.at_level(logging.ERROR):
            scheduler.fire("bad")
        assert "boom" in caplog.text

    def test_run_task_skips_cancelled_handle(self):
        calls = []
        handle = TimerHandle(period=1.0, task=lambda: calls.append(1), cancelled=True)
        ManualScheduler.run_task(handle)
        assert calls == []


class TestMenuAwareTimer:
    """Tests for MenuAwareTimer that don't need the AppKit run loop."""

    def test_initial_state(self):
        timer = MenuAwareTimer(lambda: None, interval=1.0)
        assert timer.interval == 1.0
        assert timer.running is False

    def test_stop_without_start(self):
        timer = MenuAwareTimer(lambda: None, interval=1.0)
        timer.stop()
        assert timer.running is False

    def test_start_and_stop_flip_running(self, monkeypatch):
        monkeypatch.setattr(MenuAwareTimer, "_run", lambda self, stopped: None)
        timer = MenuAwareTimer(lambda: None, interval=1.0)

        timer.start()
        assert timer.running is True
        timer.stop()
        assert timer.running is False

    def test_restart_uses_fresh_stop_event(self, monkeypatch):
        monkeypatch.setattr(MenuAwareTimer, "_run", lambda self, stopped: None)
        timer = MenuAwareTimer(lambda: None, interval=1.0)

        timer.start()
        first = timer._stopped
        timer.stop()
        timer.start()

        assert timer._stopped is not first
        assert first.is_set()
        assert timer.running is True


class TestMenuAwareScheduler:
    """Tests for MenuAwareScheduler bookkeeping."""

    def test_cancel_stops_timer(self, monkeypatch):
        started = []
        stopped = []
        monkeypatch.setattr(MenuAwareTimer, "start", lambda self: started.append(self))
        monkeypatch.setattr(MenuAwareTimer, "stop", lambda self: stopped.append(self))

        scheduler = MenuAwareScheduler()
        handle = scheduler.schedule_repeating(1.0, lambda: None)
        assert len(started) == 1
        assert started[0].interval == 1.0

        scheduler.cancel(handle)
        assert stopped == started
        assert scheduler.active_count == 0
