"""Repeating timers for the menu bar application.

``Scheduler`` is the interface the controller talks to:
``schedule_repeating(period, task)`` returns a handle that ``cancel(handle)``
deregisters. ``MenuAwareScheduler`` backs every handle with a
``MenuAwareTimer``, which keeps firing while the menu is open and always runs
the task on the main thread.

Usage:
    from app.timer import MenuAwareScheduler

    scheduler = MenuAwareScheduler()
    handle = scheduler.schedule_repeating(1.0, lambda: print("Tick!"))
    scheduler.cancel(handle)
"""

import itertools
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from config import SchedulerError, get_logger

logger = get_logger(__name__)

Task = Callable[[], None]

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class TimerHandle:
    """Cancellation handle for a repeating task.

    Attributes:
        period: Seconds between ticks.
        task: Callable run on every tick.
        name: Label used in log messages.
    """

    period: float
    task: Task
    name: str = ""
    id: int = field(default_factory=lambda: next(_handle_ids))
    cancelled: bool = False

    def __str__(self) -> str:
        return f"TimerHandle({self.name or self.id}, every {self.period}s)"


class Scheduler(ABC):
    """Registers repeating tasks and cancels them by handle."""

    def __init__(self):
        self._active: Dict[int, TimerHandle] = {}

    def schedule_repeating(self, period: float, task: Task, name: str = "") -> TimerHandle:
        """Run ``task`` every ``period`` seconds until cancelled.

        The first run happens one period after scheduling.
        """
        handle = TimerHandle(period=period, task=task, name=name)
        self._active[handle.id] = handle
        self._start(handle)
        logger.debug(f"Scheduled {handle}")
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        """Stop a repeating task. Cancelling twice is a no-op.

        Raises:
            SchedulerError: If the handle belongs to another scheduler.
        """
        if handle.cancelled:
            return
        if self._active.pop(handle.id, None) is None:
            raise SchedulerError("Unknown timer handle", {"handle": str(handle)})
        handle.cancelled = True
        self._stop(handle)
        logger.debug(f"Cancelled {handle}")

    def cancel_all(self) -> None:
        for handle in list(self._active.values()):
            self.cancel(handle)

    @property
    def active_count(self) -> int:
        return len(self._active)

    def is_active(self, handle: Optional[TimerHandle]) -> bool:
        return handle is not None and handle.id in self._active

    @staticmethod
    def run_task(handle: TimerHandle) -> None:
        """Run one tick, logging anything the task raises."""
        if handle.cancelled:
            return
        try:
            handle.task()
        except Exception as e:
            logger.error(f"Error in timer task {handle}: {e}", exc_info=True)

    @abstractmethod
    def _start(self, handle: TimerHandle) -> None:
        """Begin firing ``handle``."""

    @abstractmethod
    def _stop(self, handle: TimerHandle) -> None:
        """Stop firing ``handle``."""


# NSObject subclass that runs ticks on the main thread - created once, on first use
_MainThreadTickerClass = None
_MainThreadTickerLock = threading.Lock()


def _get_main_thread_ticker_class():
    """Get or create the NSObject subclass that trampolines ticks to the main thread."""
    global _MainThreadTickerClass

    if _MainThreadTickerClass is not None:
        return _MainThreadTickerClass

    with _MainThreadTickerLock:
        if _MainThreadTickerClass is None:
            from Foundation import NSObject

            class _MainThreadTicker(NSObject):
                """Receives ``tick:`` on the main thread and runs the callback."""

                callback = None
                stopped = None

                def tick_(self, _):
                    # Ticks queued before stop() arrive late; drop them
                    if self.callback is not None and not self.stopped.is_set():
                        self.callback()

            _MainThreadTickerClass = _MainThreadTicker

    return _MainThreadTickerClass


class MenuAwareTimer:
    """Repeating timer that keeps ticking while the status menu is open.

    An NSTimer on the default run loop mode is starved during menu
    tracking, which would freeze the history rows exactly when the user is
    looking at them. Instead a daemon thread waits out each interval and
    posts ``tick:`` to the main thread, so the callback still runs on the
    main thread and never concurrently with menu updates.

    Each start() gets its own stop event: a thread from an earlier run
    cannot keep ticking after a quick stop()/start().

    Example:
        >>> timer = MenuAwareTimer(callback, interval=1.0)
        >>> timer.start()
        >>> timer.stop()
    """

    def __init__(self, callback: Task, interval: float):
        self._callback = callback
        self._interval = interval
        self._stopped: Optional[threading.Event] = None
        self._ticker = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._stopped is not None and not self._stopped.is_set()

    def _run(self, stopped: threading.Event) -> None:
        ticker = _get_main_thread_ticker_class().alloc().init()
        ticker.callback = self._callback
        ticker.stopped = stopped
        self._ticker = ticker

        # wait() returns True once stop() sets the event
        while not stopped.wait(self._interval):
            ticker.performSelectorOnMainThread_withObject_waitUntilDone_("tick:", None, False)

    def start(self) -> None:
        if self.running:
            return
        stopped = threading.Event()
        self._stopped = stopped
        threading.Thread(target=self._run, args=(stopped,), daemon=True).start()
        logger.debug(f"MenuAwareTimer started, every {self._interval}s")

    def stop(self) -> None:
        if self._stopped is not None:
            self._stopped.set()
        self._ticker = None
        logger.debug("MenuAwareTimer stopped")


class MenuAwareScheduler(Scheduler):
    """Scheduler backed by one MenuAwareTimer per handle."""

    def __init__(self):
        super().__init__()
        self._timers: Dict[int, MenuAwareTimer] = {}

    def _start(self, handle: TimerHandle) -> None:
        timer = MenuAwareTimer(lambda: self.run_task(handle), handle.period)
        self._timers[handle.id] = timer
        timer.start()

    def _stop(self, handle: TimerHandle) -> None:
        timer = self._timers.pop(handle.id, None)
        if timer:
            timer.stop()
