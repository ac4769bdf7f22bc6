"""In-memory window store."""

from __future__ import annotations

from dirwm.windows.model import Window


class WindowStore:
    """Authoritative mapping of window id to Window.

    Thread safety: none. Every call must come from the UI thread; watcher
    workers hand their mutations over instead of calling in directly.
    """

    def __init__(self) -> None:
        self._windows: dict[str, Window] = {}

    def put(self, window: Window) -> None:
        """Insert or replace the window for ``window.id``."""
        self._windows[window.id] = window

    def delete(self, window_id: str) -> bool:
        """Remove a window. Deleting an absent id is a no-op."""
        return self._windows.pop(window_id, None) is not None

    def delete_tree(self, window_id: str) -> list[str]:
        """Remove a window together with every window nested below it."""
        prefix = window_id + "/"
        doomed = [wid for wid in self._windows if wid == window_id or wid.startswith(prefix)]
        for wid in doomed:
            del self._windows[wid]
        return sorted(doomed)

    def get(self, window_id: str) -> Window | None:
        return self._windows.get(window_id)

    def ids(self) -> list[str]:
        return sorted(self._windows)

    def snapshot(self) -> tuple[Window, ...]:
        """Return all windows ordered by id."""
        return tuple(self._windows[wid] for wid in sorted(self._windows))

    def __contains__(self, window_id: object) -> bool:
        return window_id in self._windows

    def __len__(self) -> int:
        return len(self._windows)
