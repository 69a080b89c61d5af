"""Wiring for the mode controller's collaborators.

``ModeController`` only sees what is in ``AppDependencies``. Production code
gets psutil counters and main-thread timers from ``create_dependencies``;
tests build the container directly with scripted counters and a scheduler
they fire by hand.

Usage:
    from app.dependencies import create_dependencies

    controller = ModeController(create_dependencies())
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from config import STORAGE, get_logger

if TYPE_CHECKING:
    from app.events import EventBus
    from app.timer import Scheduler
    from monitor.counters import CounterSource
    from storage.settings import SettingsManager

logger = get_logger(__name__)


@dataclass
class AppDependencies:
    """What the controller samples from, schedules on and reports to."""

    counter_source: "CounterSource"
    scheduler: "Scheduler"

    # Without settings the selected mode is not remembered across launches
    settings: Optional["SettingsManager"] = None

    # The controller creates a private bus when none is given
    event_bus: Optional["EventBus"] = None


def create_dependencies(
    data_dir: Optional[Path] = None, event_bus: Optional["EventBus"] = None
) -> AppDependencies:
    """Build the real collaborators.

    Args:
        data_dir: Where settings.json lives. Defaults to ~/.speedy/
        event_bus: Bus the UI already subscribed to, if any.
    """
    # Deferred: app.timer and monitor import config, which app imports
    from app.events import EventBus
    from app.timer import MenuAwareScheduler
    from monitor.counters import CounterSource
    from storage.settings import get_settings_manager

    data_dir = data_dir or Path.home() / STORAGE.DATA_DIR_NAME
    deps = AppDependencies(
        counter_source=CounterSource(),
        scheduler=MenuAwareScheduler(),
        settings=get_settings_manager(data_dir),
        event_bus=event_bus or EventBus(),
    )
    logger.debug(f"Dependencies created (data_dir={data_dir})")
    return deps
