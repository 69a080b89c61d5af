"""Update-mode controller for Speedy.

Owns the sampling state (delta baseline and rolling history) and the two
repeating timers:

- the background timer samples on entering continuous mode and then once a
  second, whether the menu is open or not;
- the menu timer runs only while the menu is open. In continuous mode it
  just repaints the rows; in on-demand mode it also samples.

Every timer callback runs on the main thread, so no locking is needed.

Usage:
    from app.controller import ModeController
    from app.dependencies import create_dependencies

    controller = ModeController(create_dependencies())
    controller.start()
    ...
    controller.shutdown()
"""
from datetime import datetime
from typing import Callable, List, Optional

from app.dependencies import AppDependencies
from app.events import EventBus, EventType
from app.timer import TimerHandle
from config import HISTORY, INTERVALS, UI, get_logger
from monitor.delta import DeltaEngine
from monitor.history import Sample, SampleHistory
from monitor.utils import format_history_rows, format_title
from storage.settings import DEFAULT_UPDATE_MODE, UpdateMode

logger = get_logger(__name__)


class ModeController:
    """State machine over the three update modes.

    Attributes:
        deps: The dependency container.
        event_bus: Bus the UI listens on for title and row changes.
        history: The rolling sample history.
    """

    def __init__(self, deps: AppDependencies, clock: Callable[[], datetime] = datetime.now):
        """Initialize the controller.

        Args:
            deps: AppDependencies container with the counter source and scheduler.
            clock: Returns the timestamp for new samples.
        """
        self.deps = deps
        self.event_bus = deps.event_bus or EventBus()
        self.history = SampleHistory(HISTORY.MAX_LOG_ENTRIES)
        self._scheduler = deps.scheduler
        self._engine = DeltaEngine(deps.counter_source)
        self._clock = clock

        self._mode: Optional[UpdateMode] = None
        self._title: str = UI.PLACEHOLDER_TITLE
        self._background_timer: Optional[TimerHandle] = None
        self._menu_timer: Optional[TimerHandle] = None
        self._menu_open = False
        self._running = False
        self._stopped = False

    # === Lifecycle ===

    def start(self, mode: Optional[UpdateMode] = None) -> None:
        """Enter the initial mode.

        Args:
            mode: Mode to start in. Defaults to the remembered mode, or
                continuous when there are no settings.
        """
        if self._running or self._stopped:
            return

        if mode is None:
            settings = self.deps.settings
            mode = settings.get_update_mode() if settings else DEFAULT_UPDATE_MODE

        logger.info(f"Starting ModeController in {mode.value} mode")
        self._running = True
        self.event_bus.publish(EventType.APP_STARTING, {'mode': mode})
        self.set_mode(mode, remember=False)

    def shutdown(self) -> None:
        """Cancel both timers. The controller cannot be restarted."""
        if self._stopped:
            return
        logger.info("Shutting down ModeController...")
        self._stop_background_timer()
        self._stop_menu_timer()
        self._running = False
        self._stopped = True
        self.event_bus.publish(EventType.APP_STOPPING)

    @property
    def is_running(self) -> bool:
        return self._running

    # === Mode ===

    @property
    def mode(self) -> Optional[UpdateMode]:
        return self._mode

    def set_mode(self, mode: UpdateMode, remember: bool = True) -> None:
        """Switch mode and reconfigure timers.

        Both timers are always stopped first; the entry action of the new
        mode then starts whatever it needs.

        Args:
            mode: The mode the user selected.
            remember: Save the mode so the next launch starts in it.
        """
        if not self._running:
            logger.warning(f"Ignoring mode change to {mode.value}: controller not running")
            return

        self._stop_background_timer()
        self._stop_menu_timer()

        previous = self._mode
        self._mode = mode
        if remember and self.deps.settings:
            self.deps.settings.set_update_mode(mode)

        logger.info(f"Update mode: {previous.value if previous else None} -> {mode.value}")
        self.event_bus.publish(EventType.MODE_CHANGED, {'mode': mode, 'previous': previous})

        if mode is UpdateMode.CONTINUOUS:
            self._start_background_timer()
        else:
            self._set_title(UI.PLACEHOLDER_TITLE)

    # === Menu triggers ===

    @property
    def menu_open(self) -> bool:
        return self._menu_open

    def on_menu_open(self) -> None:
        """Start the menu timer appropriate for the current mode."""
        self._menu_open = True
        if not self._running:
            return

        if self._mode is UpdateMode.CONTINUOUS:
            self._start_menu_timer(sample=False)
        elif self._mode is UpdateMode.ON_DEMAND:
            self._start_menu_timer(sample=True)
        else:
            # Paused: show the frozen list as it is
            self._stop_menu_timer()
            self._refresh_rows()

    def on_menu_close(self) -> None:
        """Stop the menu timer; the background timer keeps going."""
        self._menu_open = False
        self._stop_menu_timer()

    # === Presentation ===

    def current_title(self) -> str:
        return self._title

    def history_rows(self, max_rows: int = HISTORY.MAX_LOG_ENTRIES) -> List[str]:
        """Get exactly ``max_rows`` menu rows, newest first, ``'-'`` when empty."""
        return format_history_rows(self.history.snapshot_newest_first(max_rows), max_rows)

    # === Timers ===

    @property
    def background_timer_active(self) -> bool:
        return self._background_timer is not None

    @property
    def menu_timer_active(self) -> bool:
        return self._menu_timer is not None

    def _start_background_timer(self) -> None:
        self._stop_background_timer()
        self._engine.calibrate()
        self._background_timer = self._scheduler.schedule_repeating(
            INTERVALS.SAMPLE_SECONDS, self._background_tick, name="background"
        )
        # Fill the title now instead of showing the placeholder for a second
        self._background_tick()

    def _stop_background_timer(self) -> None:
        if self._background_timer is not None:
            self._scheduler.cancel(self._background_timer)
            self._background_timer = None

    def _background_tick(self) -> None:
        if self._mode is not UpdateMode.CONTINUOUS:
            return
        sample = self._take_sample()
        self._set_title(format_title(sample.rx_bytes_per_second, sample.tx_bytes_per_second))

    def _start_menu_timer(self, sample: bool) -> None:
        self._stop_menu_timer()

        if sample:
            # New list per open
            self.history.clear()
            self.event_bus.publish(EventType.HISTORY_CLEARED)
            self._engine.calibrate()
            self._take_sample()

        self._menu_timer = self._scheduler.schedule_repeating(
            INTERVALS.MENU_REFRESH_SECONDS, lambda: self._menu_tick(sample), name="menu"
        )
        self._refresh_rows()

    def _stop_menu_timer(self) -> None:
        if self._menu_timer is not None:
            self._scheduler.cancel(self._menu_timer)
            self._menu_timer = None

    def _menu_tick(self, sample: bool) -> None:
        # In continuous mode the background timer is already sampling
        if sample and self._mode is UpdateMode.ON_DEMAND:
            self._take_sample()
        self._refresh_rows()

    # === Sampling ===

    def _take_sample(self) -> Sample:
        rx, tx = self._engine.sample()
        sample = Sample(timestamp=self._clock(), rx_bytes_per_second=rx, tx_bytes_per_second=tx)
        self.history.append(sample)
        logger.debug(f"Sample: rx={rx}B/s tx={tx}B/s ({len(self.history)} in history)")
        self.event_bus.publish(EventType.SAMPLE_TAKEN, {'sample': sample})
        return sample

    def _set_title(self, title: str) -> None:
        self._title = title
        self.event_bus.publish(EventType.TITLE_UPDATED, {'title': title})

    def _refresh_rows(self) -> None:
        self.event_bus.publish(EventType.ROWS_UPDATED, {'rows': self.history_rows()})
