#!/usr/bin/env python3
"""
Speedy - macOS Menu Bar Application
Shows current download/upload throughput and a short rolling history.
"""
import signal
import sys
from pathlib import Path
from typing import Optional

import rumps

from app.controller import ModeController
from app.dependencies import create_dependencies
from app.events import EventBus, EventType
from app.views.menu_builder import MenuBuilder, MenuCallbacks, install_menu_delegate
from config import APP, INTERVALS, STORAGE, UI, LogContext, get_logger, setup_logging
from storage.settings import UpdateMode, get_settings_manager

logger = get_logger(__name__)


def hide_dock_icon() -> None:
    """Run as a menu bar only app (no Dock icon)."""
    from Foundation import NSBundle

    info = NSBundle.mainBundle().infoDictionary()
    info["LSUIElement"] = "1"


class SpeedyApp(rumps.App):
    """Status bar item showing throughput, with the history in its menu."""

    def __init__(self, data_dir: Optional[Path] = None):
        super().__init__(
            name=APP.NAME,
            title=UI.PLACEHOLDER_TITLE,
            quit_button=None
        )

        self._event_bus = EventBus()
        self._deps = create_dependencies(data_dir=data_dir, event_bus=self._event_bus)
        self._controller = ModeController(self._deps)
        self._menu_builder = MenuBuilder()
        self._menu_delegate = None
        self._timers_started = False

        logger.info("SpeedyApp initializing...")

        self.menu = self._menu_builder.build_main_menu(
            MenuCallbacks(select_mode=self._select_mode, quit_app=self._quit),
            self._deps.settings.get_update_mode(),
        )
        self._subscribe_to_events()

        # Menu items only get their NSMenuItem objects once rumps.run() starts,
        # so timers and the menu delegate are installed from a one-shot timer.
        self._startup_timer = rumps.Timer(self._delayed_start, INTERVALS.STARTUP_DELAY_SECONDS)
        self._startup_timer.start()

    def _subscribe_to_events(self) -> None:
        self._event_bus.subscribe(EventType.TITLE_UPDATED, self._on_title_updated)
        self._event_bus.subscribe(EventType.ROWS_UPDATED, self._on_rows_updated)
        self._event_bus.subscribe(EventType.MODE_CHANGED, self._on_mode_changed)

    def _on_title_updated(self, event) -> None:
        self.title = event.data['title']

    def _on_rows_updated(self, event) -> None:
        self._menu_builder.update_rows(event.data['rows'])

    def _on_mode_changed(self, event) -> None:
        self._menu_builder.update_mode_states(event.data['mode'])

    def _delayed_start(self, _) -> None:
        """Called by rumps.Timer after app.run() to start the controller."""
        if self._timers_started:
            return
        self._timers_started = True

        self._startup_timer.stop()
        self._startup_timer = None

        self._set_title_font()
        self._menu_delegate = install_menu_delegate(
            self.menu, self._on_menu_open, self._on_menu_close
        )

        with LogContext(logger, "Controller start"):
            self._controller.start()

    def _set_title_font(self) -> None:
        """Use monospaced digits so the title width does not jitter."""
        try:
            from AppKit import NSFont, NSFontWeightRegular

            button = self._nsapp.nsstatusitem.button()
            button.setFont_(
                NSFont.monospacedDigitSystemFontOfSize_weight_(UI.TITLE_FONT_SIZE, NSFontWeightRegular)
            )
        except (AttributeError, ImportError) as e:
            logger.debug(f"Could not set title font: {e}")

    def _on_menu_open(self) -> None:
        # Paint the current rows before the menu shows
        self._menu_builder.update_rows(self._controller.history_rows())
        self._controller.on_menu_open()

    def _on_menu_close(self) -> None:
        self._controller.on_menu_close()

    def _select_mode(self, mode: UpdateMode) -> None:
        self._controller.set_mode(mode)

    def shutdown(self) -> None:
        self._controller.shutdown()

    def _quit(self, _):
        """Quit the application."""
        logger.info("Application shutting down...")
        self.shutdown()
        logger.info("Shutdown complete")
        rumps.quit_application()


def main():
    """Entry point for the application."""
    data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    debug = get_settings_manager(data_dir).get_debug_logging()
    setup_logging(data_dir=data_dir, debug=debug, console_output=True)
    logger.info("Speedy starting...")

    hide_dock_icon()

    app = None

    def signal_handler(signum, frame):
        """Handle SIGTERM/SIGINT by stopping timers before exit."""
        logger.info(f"Received signal {signum}, quitting...")
        if app:
            app.shutdown()
        rumps.quit_application()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        app = SpeedyApp(data_dir=data_dir)
        app.run()
    except Exception as e:
        logger.critical(f"Application crashed: {e}", exc_info=True)
        raise
    finally:
        if app:
            app.shutdown()


if __name__ == "__main__":
    sys.exit(main())
