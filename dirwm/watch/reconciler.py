"""Event reconciler: filesystem events in, window store mutations out.

Work is split in two halves so the store is only ever touched from one
thread:

* ``decode`` runs on a watcher worker. It stats paths and reads files, and
  returns the mutations the event implies without looking at the store.
* ``apply`` runs on the UI thread. It mutates the store, keeps the per-window
  watch registry in step and asks for a redraw.

Root-scope events drive each top-level window id between ABSENT and PRESENT.
Window-scope events do the same for directories nested inside a watched
window, and carry its ``content``/``tag`` changes. A path that no longer stats
is handled exactly like a delete event, which keeps the store converging even
when events are missed or arrive late.
"""

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Protocol, Union

from loguru import logger

from dirwm.errors import ScanError, WatchError
from dirwm.watch.source import EVENT_CREATED, EVENT_DELETED, EVENT_MODIFIED, FsEvent
from dirwm.windows.model import CONTENT_FILE, DEFAULT_TAG_SUFFIX, TAG_FILE, Window
from dirwm.windows.scanner import (
    list_window_ids,
    read_content,
    read_tag,
    read_window,
    stat_path,
    strip_backup_suffix,
    window_dir,
    window_id_for,
)
from dirwm.windows.store import WindowStore

WINDOW_FILES = (CONTENT_FILE, TAG_FILE)


class Scope(str, enum.Enum):
    """Which watch produced an event."""

    ROOT = "root"
    WINDOW = "window"


@dataclass(frozen=True)
class PutWindow:
    window: Window


@dataclass(frozen=True)
class EnsureWindow:
    """Put only if the id is not already present."""

    window: Window


@dataclass(frozen=True)
class DeleteWindow:
    """Remove a window and everything nested below it."""

    window_id: str


@dataclass(frozen=True)
class UpdateWindowFile:
    """New value for one of a window's files, merged into the stored window."""

    window_id: str
    field: str
    value: str


Mutation = Union[PutWindow, EnsureWindow, DeleteWindow, UpdateWindowFile]


class WindowWatcher(Protocol):
    """Per-window watch scope as seen by the reconciler."""

    def watch(self, path: str) -> Any:
        ...

    def unwatch(self, handle: Any) -> None:
        ...

    def inject(self, event: FsEvent) -> None:
        ...


class Reconciler:
    """Translate filesystem events into WindowStore mutations."""

    def __init__(
        self,
        store: WindowStore,
        root: str,
        working_dir: str,
        window_watcher: WindowWatcher | None = None,
        request_redraw: Callable[[], None] | None = None,
        tag_suffix: str = DEFAULT_TAG_SUFFIX,
    ) -> None:
        self.store = store
        self.root = os.path.abspath(root)
        self.working_dir = working_dir
        self.tag_suffix = tag_suffix
        self._window_watcher = window_watcher
        self._request_redraw = request_redraw or (lambda: None)
        self._watches: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------

    def decode(self, scope: Scope, event: FsEvent) -> list[Mutation]:
        """Work out the mutations an event implies. Safe off the UI thread."""
        if scope is Scope.ROOT:
            return self._decode_root(event)
        return self._decode_window(event)

    def _decode_root(self, event: FsEvent) -> list[Mutation]:
        path = strip_backup_suffix(event.path)
        rel_id = window_id_for(self.root, path)
        if rel_id is None:
            return []
        window_id = rel_id.split("/")[0]
        top = window_dir(self.root, window_id)

        try:
            info = stat_path(top)
        except OSError as exc:
            logger.warning(f"[reconcile] Cannot stat {top}: {exc}")
            return []

        if info is None or event.kind == EVENT_DELETED:
            return [DeleteWindow(window_id)]

        if not stat.S_ISDIR(info.st_mode):
            return []

        if event.kind == EVENT_CREATED:
            return self._put_subtree(top, window_id)

        if event.kind == EVENT_MODIFIED:
            return [EnsureWindow(self._read(window_id))]

        return []

    def _decode_window(self, event: FsEvent) -> list[Mutation]:
        path = strip_backup_suffix(event.path)
        try:
            info = stat_path(path)
        except OSError as exc:
            logger.warning(f"[reconcile] Cannot stat {path}: {exc}")
            return []

        path_id = window_id_for(self.root, path)
        if path_id is None:
            return []

        # A watched window directory, or a directory nested one level below it.
        if info is not None and stat.S_ISDIR(info.st_mode):
            if event.kind == EVENT_CREATED:
                return self._put_subtree(path, path_id)
            return [EnsureWindow(self._read(path_id))]

        name = os.path.basename(path)
        window_id = window_id_for(self.root, os.path.dirname(path))
        if name in WINDOW_FILES and window_id is not None:
            return [UpdateWindowFile(window_id, name, self._read_file(window_id, name))]

        if info is None:
            # The window itself or a nested window is gone.
            return [DeleteWindow(path_id)]
        return []

    def _put_subtree(self, top: str, window_id: str) -> list[Mutation]:
        try:
            ids = list_window_ids(self.root, top=top)
        except ScanError as exc:
            logger.debug(f"[reconcile] Subtree walk of {top} failed: {exc}")
            ids = [window_id]
        return [PutWindow(self._read(wid)) for wid in ids]

    def _read_file(self, window_id: str, name: str) -> str:
        directory = window_dir(self.root, window_id)
        if name == CONTENT_FILE:
            return read_content(directory)
        return read_tag(directory, self.working_dir, self.tag_suffix)

    def _read(self, window_id: str) -> Window:
        return read_window(self.root, window_id, self.working_dir, self.tag_suffix)

    # ------------------------------------------------------------------
    # UI side
    # ------------------------------------------------------------------

    def apply(self, mutations: Iterable[Mutation]) -> bool:
        """Apply mutations to the store. Must run on the UI thread.

        Returns True (and requests one redraw) when the store changed.
        """
        changed = False
        for mutation in mutations:
            if isinstance(mutation, PutWindow):
                changed |= self._put(mutation.window)
            elif isinstance(mutation, EnsureWindow):
                if mutation.window.id not in self.store:
                    changed |= self._put(mutation.window)
            elif isinstance(mutation, DeleteWindow):
                removed = self.store.delete_tree(mutation.window_id)
                for window_id in removed:
                    self._untrack(window_id)
                if removed:
                    logger.info(f"[reconcile] Removed window(s) {', '.join(removed)}")
                    changed = True
            elif isinstance(mutation, UpdateWindowFile):
                current = self.store.get(mutation.window_id)
                if current is None:
                    logger.debug(f"[reconcile] Dropping {mutation.field} update for absent {mutation.window_id!r}")
                    continue
                updated = current.with_field(mutation.field, mutation.value)
                if updated != current:
                    self.store.put(updated)
                    changed = True

        if changed:
            self._request_redraw()
        return changed

    def dispatch(self, scope: Scope, event: FsEvent) -> bool:
        """Decode and apply in one step, for single-threaded callers."""
        return self.apply(self.decode(scope, event))

    def seed(self, windows: Iterable[Window]) -> bool:
        """Load the startup window set and register its watches."""
        return self.apply([PutWindow(window) for window in windows])

    def _put(self, window: Window) -> bool:
        previous = self.store.get(window.id)
        self.store.put(window)
        self._track(window.id)
        if previous is None:
            logger.info(f"[reconcile] Added window {window.id!r}")
        return previous != window

    def _track(self, window_id: str) -> None:
        if self._window_watcher is None or window_id in self._watches:
            return
        directory = window_dir(self.root, window_id)
        try:
            handle = self._window_watcher.watch(directory)
        except (OSError, WatchError) as exc:
            logger.debug(f"[reconcile] Not watching {window_id!r}: {exc}")
            return
        self._watches[window_id] = handle
        # Writes that landed before the watch existed would otherwise be lost.
        for name in WINDOW_FILES:
            self._window_watcher.inject(FsEvent(EVENT_MODIFIED, os.path.join(directory, name)))

    def _untrack(self, window_id: str) -> None:
        handle = self._watches.pop(window_id, None)
        if handle is not None and self._window_watcher is not None:
            self._window_watcher.unwatch(handle)

    @property
    def watched_ids(self) -> list[str]:
        return sorted(self._watches)
