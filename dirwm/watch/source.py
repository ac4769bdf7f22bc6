"""watchdog-backed filesystem event streams.

A ``WatchSource`` owns one watchdog ``Observer`` and turns its callbacks into
a blocking, non-restartable stream of ``FsEvent`` values. Each watch scope
(root, per-window) gets its own source so the two streams stay independent.
"""

from __future__ import annotations

import os
import queue
import threading
from dataclasses import dataclass
from typing import Iterator

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch

from dirwm.errors import WatchError

EVENT_CREATED = "created"
EVENT_MODIFIED = "modified"
EVENT_DELETED = "deleted"

_CLOSED = object()


@dataclass(frozen=True)
class FsEvent:
    """A decoded filesystem change notification."""

    kind: str
    path: str
    is_directory: bool = False


class _QueueingHandler(FileSystemEventHandler):
    """Forwards watchdog callbacks (observer thread) into a queue."""

    def __init__(self, sink: "queue.Queue[object]", name: str) -> None:
        super().__init__()
        self._sink = sink
        self._name = name

    def _push(self, kind: str, path: str | bytes, is_directory: bool) -> None:
        self._sink.put(FsEvent(kind=kind, path=os.fsdecode(path), is_directory=is_directory))

    def on_created(self, event: FileSystemEvent) -> None:
        self._push(EVENT_CREATED, event.src_path, event.is_directory)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._push(EVENT_MODIFIED, event.src_path, event.is_directory)

    def on_closed(self, event: FileSystemEvent) -> None:
        # Close-after-write: the file contents are final now.
        self._push(EVENT_MODIFIED, event.src_path, event.is_directory)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._push(EVENT_DELETED, event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._push(EVENT_DELETED, event.src_path, event.is_directory)
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            self._push(EVENT_CREATED, dest_path, event.is_directory)


class WatchSource:
    """One watch scope: an observer, its registrations and its event stream."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._handler = _QueueingHandler(self._queue, name)
        self._observer: Observer | None = None
        self._lock = threading.Lock()
        self._closed = False
        self._consumed = False

    def start(self) -> None:
        """Start the underlying observer thread."""
        if self._observer is not None:
            return
        observer = Observer()
        observer.daemon = True
        try:
            observer.start()
        except Exception as exc:
            raise WatchError(f"Failed to start {self.name} watcher: {exc}") from exc
        self._observer = observer
        logger.debug(f"[watch] {self.name} observer started")

    def watch(self, path: str) -> ObservedWatch:
        """Register a non-recursive watch on ``path``.

        Raises OSError when the directory no longer exists.
        """
        if self._observer is None:
            raise WatchError(f"{self.name} watcher is not running")
        if not os.path.isdir(path):
            raise FileNotFoundError(path)
        with self._lock:
            handle = self._observer.schedule(self._handler, path, recursive=False)
        logger.debug(f"[watch] {self.name} watching {path}")
        return handle

    def unwatch(self, handle: ObservedWatch) -> None:
        """Drop a registration; a target that is already gone is fine."""
        if self._observer is None:
            return
        try:
            with self._lock:
                self._observer.unschedule(handle)
        except (KeyError, OSError) as exc:
            logger.debug(f"[watch] {self.name} unwatch {handle.path} ignored: {exc}")

    def inject(self, event: FsEvent) -> None:
        """Queue a synthetic event behind everything already delivered."""
        if not self._closed:
            self._queue.put(event)

    def events(self) -> Iterator[FsEvent]:
        """Blocking stream of events; ends once the source is closed."""
        if self._consumed:
            raise RuntimeError(f"{self.name} event stream already consumed")
        self._consumed = True
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item

    def close(self, timeout_s: float = 2.0) -> None:
        """Stop the observer and end the event stream."""
        if self._closed:
            return
        self._closed = True
        observer = self._observer
        self._observer = None
        if observer is not None:
            try:
                observer.stop()
                observer.join(timeout=timeout_s)
            except Exception as exc:
                logger.warning(f"[watch] Error stopping {self.name} observer: {exc}")
        self._queue.put(_CLOSED)
        logger.debug(f"[watch] {self.name} closed")

    @property
    def is_running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()
