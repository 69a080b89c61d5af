"""Menu building utilities for Speedy.

Builds the rumps menu (history rows, mode selection, Quit) and the NSMenu
delegate that reports when the menu opens and closes.

Usage:
    from app.views.menu_builder import MenuBuilder, MenuCallbacks

    builder = MenuBuilder()
    app.menu = builder.build_main_menu(callbacks, UpdateMode.CONTINUOUS)
"""
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import rumps

from config import HISTORY, UI, get_logger
from storage.settings import UpdateMode

logger = get_logger(__name__)

MODE_LABELS = (
    (UpdateMode.PAUSED, UI.MODE_PAUSED),
    (UpdateMode.CONTINUOUS, UI.MODE_CONTINUOUS),
    (UpdateMode.ON_DEMAND, UI.MODE_ON_DEMAND),
)


@dataclass
class MenuCallbacks:
    """Container for menu item callbacks."""
    select_mode: Optional[Callable[[UpdateMode], None]] = None
    quit_app: Optional[Callable] = None


class MenuBuilder:
    """Builds the menu and repaints its rows and mode checkmarks in place."""

    def __init__(self, max_rows: int = HISTORY.MAX_LOG_ENTRIES):
        self.max_rows = max_rows
        self._row_items: List[rumps.MenuItem] = []
        self._mode_items: Dict[UpdateMode, rumps.MenuItem] = {}
        logger.debug("MenuBuilder initialized")

    def build_main_menu(self, callbacks: MenuCallbacks, mode: Optional[UpdateMode] = None) -> List:
        """Build the complete menu structure.

        Args:
            callbacks: Container with callback functions for menu items.
            mode: Mode to show as selected.

        Returns:
            List of menu items for rumps.App.menu
        """
        # Items without a callback are shown disabled
        self._row_items = [rumps.MenuItem(UI.EMPTY_ROW) for _ in range(self.max_rows)]

        self._mode_items = {}
        for item_mode, label in MODE_LABELS:
            self._mode_items[item_mode] = rumps.MenuItem(
                label, callback=self._mode_callback(callbacks, item_mode)
            )
        self.update_mode_states(mode)

        return [
            rumps.MenuItem(UI.HISTORY_HEADER),
            *self._row_items,
            rumps.separator,
            rumps.MenuItem(UI.MODE_HEADER),
            *self._mode_items.values(),
            rumps.separator,
            rumps.MenuItem(UI.QUIT, callback=callbacks.quit_app, key="q"),
        ]

    @staticmethod
    def _mode_callback(callbacks: MenuCallbacks, mode: UpdateMode) -> Optional[Callable]:
        if callbacks.select_mode is None:
            return None
        return lambda sender, m=mode: callbacks.select_mode(m)

    @property
    def row_titles(self) -> List[str]:
        return [item.title for item in self._row_items]

    def update_rows(self, rows: Sequence[str]) -> None:
        """Retitle the fixed rows; missing rows become ``'-'``."""
        for idx, item in enumerate(self._row_items):
            item.title = rows[idx] if idx < len(rows) else UI.EMPTY_ROW

    def update_mode_states(self, mode: Optional[UpdateMode]) -> None:
        """Put the checkmark on the active mode only."""
        for item_mode, item in self._mode_items.items():
            item.state = 1 if item_mode is mode else 0


# NSMenu delegate class - created once, on first use
_MenuDelegateClass = None
_MenuDelegateClassLock = threading.Lock()


def _get_menu_delegate_class():
    """Get or create the NSObject subclass implementing NSMenuDelegate."""
    global _MenuDelegateClass

    if _MenuDelegateClass is not None:
        return _MenuDelegateClass

    with _MenuDelegateClassLock:
        if _MenuDelegateClass is not None:
            return _MenuDelegateClass

        from Foundation import NSObject

        class _SpeedyMenuDelegate(NSObject):
            """Forwards menu open/close to Python callbacks."""

            on_open = None
            on_close = None

            def menuWillOpen_(self, menu):
                if self.on_open:
                    self.on_open()

            def menuDidClose_(self, menu):
                if self.on_close:
                    self.on_close()

        _MenuDelegateClass = _SpeedyMenuDelegate

    return _MenuDelegateClass


def install_menu_delegate(menu: rumps.Menu, on_open: Callable[[], None],
                          on_close: Callable[[], None]):
    """Attach open/close callbacks to a rumps menu.

    NSMenu holds its delegate weakly: the caller must keep the returned
    object alive for as long as the menu exists.
    """
    delegate = _get_menu_delegate_class().alloc().init()
    delegate.on_open = on_open
    delegate.on_close = on_close
    menu._menu.setDelegate_(delegate)
    logger.debug("Menu delegate installed")
    return delegate
