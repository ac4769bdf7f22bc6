"""Textual front end: one absolutely positioned pane per window."""

from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import Key
from textual.widgets import Static

from dirwm.tui.render import PaneRenderer
from dirwm.watch.reconciler import Reconciler, Scope
from dirwm.watch.session import WatchSession
from dirwm.watch.source import FsEvent
from dirwm.windows.model import DEFAULT_TAG_SUFFIX, Pane, Window
from dirwm.windows.store import WindowStore


class PaneView(Static):
    """Framed text rectangle for one window."""

    def __init__(self, pane: Pane) -> None:
        super().__init__(Text(pane.body), classes="pane")
        self.pane_id = pane.id
        self._place(pane)

    def apply(self, pane: Pane) -> None:
        self._place(pane)
        self.update(Text(pane.body))

    def _place(self, pane: Pane) -> None:
        self.border_title = pane.title
        self.styles.offset = (pane.x, pane.y)
        # Frame takes one cell on each side.
        self.styles.width = pane.width + 2
        self.styles.height = pane.height + 2


class DirWindowManagerApp(App):
    CSS = """
    Screen {
        background: #050a08;
        color: #b7ffc8;
    }

    #desktop {
        height: 1fr;
        overflow: auto auto;
    }

    .pane {
        position: absolute;
        border: round #00ff66;
        border-title-color: #ffd400;
        background: #07160f;
        padding: 0;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: #18331f;
        color: #e2ff6d;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        store: WindowStore,
        root: str,
        working_dir: str,
        windows: Iterable[Window] = (),
        session: Optional[WatchSession] = None,
        quit_key: str = "q",
        tag_suffix: str = DEFAULT_TAG_SUFFIX,
    ) -> None:
        super().__init__()
        self.store = store
        self.watch_root = root
        self.session = session
        self.quit_key = quit_key
        self.pane_renderer = PaneRenderer(self)
        self.reconciler = Reconciler(
            store=store,
            root=root,
            working_dir=working_dir,
            window_watcher=session.window_source if session else None,
            request_redraw=self.request_redraw,
            tag_suffix=tag_suffix,
        )
        self._initial_windows = list(windows)
        self._panes: dict[str, PaneView] = {}
        self._redraw_pending = False
        self._accepting = False

    def compose(self) -> ComposeResult:
        yield Container(id="desktop")
        yield Static("", id="status-bar")

    def on_mount(self) -> None:
        self.reconciler.seed(self._initial_windows)
        self.request_redraw()
        self._accepting = True
        if self.session is not None:
            self.session.start_workers(self._handle_fs_event)
        logger.info(f"[tui] Started with {len(self.store)} window(s)")

    def on_unmount(self) -> None:
        self._accepting = False
        if self.session is not None:
            self.session.stop()

    # ------------------------------------------------------------------
    # Watcher hand-off (runs on worker threads)
    # ------------------------------------------------------------------

    def _handle_fs_event(self, scope: Scope, event: FsEvent) -> None:
        if not self._accepting:
            return
        mutations = self.reconciler.decode(scope, event)
        if mutations and self._accepting:
            self.call_from_thread(self.reconciler.apply, mutations)

    # ------------------------------------------------------------------
    # Redraw
    # ------------------------------------------------------------------

    def request_redraw(self) -> None:
        """Schedule one layout pass after the pending messages drain."""
        if self._redraw_pending:
            return
        self._redraw_pending = True
        self.call_later(self._redraw)

    def _redraw(self) -> None:
        self._redraw_pending = False
        self.pane_renderer.redraw(self.store.snapshot())
        self.refresh_status()

    def refresh_status(self) -> None:
        count = len(self.store)
        status = f"{self.watch_root}  |  {count} window{'s' if count != 1 else ''}  |  {self.quit_key} quit"
        self.query_one("#status-bar", Static).update(status)

    # ------------------------------------------------------------------
    # PaneSink
    # ------------------------------------------------------------------

    def upsert_pane(self, pane: Pane) -> None:
        view = self._panes.get(pane.id)
        if view is None:
            view = PaneView(pane)
            self._panes[pane.id] = view
            self.query_one("#desktop", Container).mount(view)
            return
        view.apply(pane)

    def remove_pane(self, pane_id: str) -> None:
        view = self._panes.pop(pane_id, None)
        if view is None:
            return
        view.remove()

    def pane_view(self, pane_id: str) -> PaneView | None:
        return self._panes.get(pane_id)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: Key) -> None:
        if event.key == self.quit_key:
            event.stop()
            self.request_quit()

    def request_quit(self) -> None:
        logger.info("[tui] Quit requested")
        self.exit()
