"""Notifications from the mode controller to the menu bar UI.

The controller never touches rumps objects. It announces what changed
(a new title, repainted rows, a different mode) and ``SpeedyApp`` applies
it to the status item. Handlers run synchronously inside ``publish``.

Usage:
    from app.events import EventBus, EventType

    bus = EventBus()
    bus.subscribe(EventType.TITLE_UPDATED, lambda e: print(e.data["title"]))
    bus.publish(EventType.TITLE_UPDATED, {"title": "↓1KB ↑0KB"})
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, DefaultDict, Dict, List, Optional

from config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """What the controller can announce."""

    # Sampling
    SAMPLE_TAKEN = auto()       # data: sample
    HISTORY_CLEARED = auto()

    # Presentation
    TITLE_UPDATED = auto()      # data: title
    ROWS_UPDATED = auto()       # data: rows
    MODE_CHANGED = auto()       # data: mode, previous

    # Lifecycle
    APP_STARTING = auto()       # data: mode
    APP_STOPPING = auto()


@dataclass(frozen=True)
class Event:
    """One announcement, with its payload and creation time."""
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"Event({self.event_type.name}, data={self.data})"


EventHandler = Callable[[Event], None]


class EventBus:
    """In-process publish/subscribe, delivered on the publisher's thread.

    Handlers for a type run in subscription order. One that raises is
    logged and skipped; the rest still run.
    """

    def __init__(self):
        self._handlers: DefaultDict[EventType, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler added for {event_type.name}")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """Remove a handler. Returns False when it was not subscribed."""
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def publish(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> None:
        event = Event(event_type, data or {})
        # Copy: a handler may unsubscribe itself
        for handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                logger.exception(f"{event_type.name} handler {handler!r} failed")

    def clear_subscribers(self, event_type: Optional[EventType] = None) -> None:
        """Drop the handlers of one type, or of every type when None."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def get_subscriber_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, ()))
