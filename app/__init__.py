"""Application module for Speedy.

Contains the main application components:
- EventBus: Controller to UI notifications
- ModeController: Update modes, timers and sampling
- Scheduler / MenuAwareScheduler: Repeating timers that work during menu tracking
- Views: Menu construction (imported separately, needs rumps)
"""

from app.controller import ModeController
from app.dependencies import AppDependencies, create_dependencies
from app.events import Event, EventBus, EventType
from app.timer import MenuAwareScheduler, MenuAwareTimer, Scheduler, TimerHandle

__all__ = [
    "AppDependencies",
    "Event",
    "EventBus",
    "EventType",
    "MenuAwareScheduler",
    "MenuAwareTimer",
    "ModeController",
    "Scheduler",
    "TimerHandle",
    "create_dependencies",
]
