"""Window entity, store and filesystem scanner."""

from dirwm.windows.model import Pane, Window, default_tag
from dirwm.windows.scanner import scan_windows
from dirwm.windows.store import WindowStore

__all__ = ["Pane", "Window", "WindowStore", "default_tag", "scan_windows"]
