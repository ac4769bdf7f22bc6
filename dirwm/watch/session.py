"""Watcher workers and their scoped lifetime."""

from __future__ import annotations

import threading
from typing import Callable

from loguru import logger

from dirwm.errors import WatchError
from dirwm.watch.reconciler import Scope
from dirwm.watch.source import FsEvent, WatchSource

EventCallback = Callable[[Scope, FsEvent], None]


class WatchWorker:
    """Drains one scope's event stream on a dedicated thread."""

    def __init__(self, scope: Scope, source: WatchSource, on_event: EventCallback) -> None:
        self.scope = scope
        self.source = source
        self.on_event = on_event
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._read_loop,
            daemon=True,
            name=f"dirwm-watch-{self.scope.value}",
        )
        self._thread.start()

    def _read_loop(self) -> None:
        for event in self.source.events():
            try:
                self.on_event(self.scope, event)
            except Exception:
                logger.exception(f"[watch] {self.scope.value} worker failed on {event.path}")
        logger.debug(f"[watch] {self.scope.value} worker stopped")

    def join(self, timeout_s: float) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout_s)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


class WatchSession:
    """Root and per-window watch sources plus one worker per scope.

    Use as a context manager: both sources are closed and the workers joined
    on every exit path.

    Usage:
        with WatchSession(root) as session:
            session.start_workers(handle_event)
            ...
    """

    def __init__(self, root: str, join_timeout_s: float = 2.0) -> None:
        self.root = root
        self.join_timeout_s = join_timeout_s
        self.root_source = WatchSource("root")
        self.window_source = WatchSource("window")
        self._workers: list[WatchWorker] = []
        self._root_handle = None

    def open(self) -> "WatchSession":
        """Start both observers and register the root watch."""
        self.root_source.start()
        self.window_source.start()
        try:
            self._root_handle = self.root_source.watch(self.root)
        except OSError as exc:
            raise WatchError(f"Failed to watch {self.root}: {exc}") from exc
        logger.info(f"[watch] Watching {self.root}")
        return self

    def start_workers(self, on_event: EventCallback) -> None:
        if self._workers:
            return
        self._workers = [
            WatchWorker(Scope.ROOT, self.root_source, on_event),
            WatchWorker(Scope.WINDOW, self.window_source, on_event),
        ]
        for worker in self._workers:
            worker.start()

    def stop(self) -> None:
        """End both event streams without waiting for the workers."""
        self.root_source.close(self.join_timeout_s)
        self.window_source.close(self.join_timeout_s)

    def close(self) -> None:
        self.stop()
        for worker in self._workers:
            worker.join(self.join_timeout_s)
        self._workers = []

    def __enter__(self) -> "WatchSession":
        try:
            return self.open()
        except BaseException:
            self.close()
            raise

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def workers(self) -> list[WatchWorker]:
        return list(self._workers)
