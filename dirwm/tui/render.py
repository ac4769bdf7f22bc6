"""Render adapter: push laid-out panes into a pane sink."""

from __future__ import annotations

from typing import Iterable, Protocol

from loguru import logger

from dirwm.layout.flow import layout_panes
from dirwm.windows.model import Pane, Window


class PaneSink(Protocol):
    """Minimal toolkit contract. Both calls are idempotent."""

    def upsert_pane(self, pane: Pane) -> None:
        ...

    def remove_pane(self, pane_id: str) -> None:
        ...


class PaneRenderer:
    """Re-runs the flow layout over a snapshot and syncs the sink."""

    def __init__(self, sink: PaneSink) -> None:
        self.sink = sink
        self._rendered: set[str] = set()
        self.passes = 0

    def redraw(self, windows: Iterable[Window]) -> list[Pane]:
        panes = layout_panes(windows)
        current = {pane.id for pane in panes}
        for stale in sorted(self._rendered - current):
            self.sink.remove_pane(stale)
        for pane in panes:
            self.sink.upsert_pane(pane)
        self._rendered = current
        self.passes += 1
        logger.debug(f"[tui] Redraw #{self.passes}: {len(panes)} pane(s)")
        return panes
