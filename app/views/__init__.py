"""View components for the Speedy menu bar UI.

Contains:
- menu_builder: Menu construction, row repainting and the NSMenu delegate
"""
from app.views.menu_builder import MenuBuilder, MenuCallbacks, install_menu_delegate

__all__ = [
    "MenuBuilder",
    "MenuCallbacks",
    "install_menu_delegate",
]
