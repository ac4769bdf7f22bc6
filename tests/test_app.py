"""Tests for the Textual front end and the pane renderer."""

import asyncio

from dirwm.tui.app import DirWindowManagerApp
from dirwm.tui.render import PaneRenderer
from dirwm.watch.reconciler import DeleteWindow, PutWindow, UpdateWindowFile
from dirwm.windows.model import Pane, Window
from dirwm.windows.store import WindowStore


class RecordingSink:
    def __init__(self) -> None:
        self.panes: dict[str, Pane] = {}
        self.removed: list[str] = []

    def upsert_pane(self, pane: Pane) -> None:
        self.panes[pane.id] = pane

    def remove_pane(self, pane_id: str) -> None:
        self.panes.pop(pane_id, None)
        self.removed.append(pane_id)


def win(wid: str, tag: str = "T", content: str = "") -> Window:
    return Window(id=wid, origin_pwd="/work", tag=tag, content=content)


class TestPaneRenderer:
    def test_pushes_every_pane(self):
        sink = RecordingSink()
        PaneRenderer(sink).redraw([win("a", content="x\ny"), win("b")])
        assert sorted(sink.panes) == ["a", "b"]
        assert sink.panes["b"].x == sink.panes["a"].width + 2

    def test_removes_panes_of_vanished_windows(self):
        sink = RecordingSink()
        renderer = PaneRenderer(sink)
        renderer.redraw([win("a"), win("b")])
        renderer.redraw([win("b")])
        assert sink.removed == ["a"]
        assert sink.panes["b"].x == 0

    def test_unchanged_content_keeps_geometry(self):
        sink = RecordingSink()
        renderer = PaneRenderer(sink)
        first = renderer.redraw([win("a", content="abc"), win("b")])
        second = renderer.redraw([win("a", content="abc"), win("b")])
        assert first == second


class TestApp:
    def test_panes_follow_the_store(self, tmp_path):
        async def scenario() -> DirWindowManagerApp:
            app = DirWindowManagerApp(
                store=WindowStore(),
                root=str(tmp_path),
                working_dir=str(tmp_path),
                windows=[win("a", content="x\ny"), win("b")],
            )
            async with app.run_test() as pilot:
                await pilot.pause()
                view_a = app.pane_view("a")
                view_b = app.pane_view("b")
                assert view_a is not None and view_b is not None
                assert view_a.border_title == "a T"
                assert view_a.styles.width.value == 4 + 2
                assert view_b.styles.offset.x.value == 4 + 2

                app.reconciler.apply([UpdateWindowFile("b", "content", "a longer body")])
                await pilot.pause()
                assert app.pane_view("b").styles.width.value == len("a longer body") + 1 + 2

                app.reconciler.apply([DeleteWindow("a"), PutWindow(win("c"))])
                await pilot.pause()
                assert app.pane_view("a") is None
                assert app.pane_view("b").styles.offset.x.value == 0
                assert app.pane_view("c") is not None
                assert app.pane_renderer.passes >= 3

                await pilot.press("q")
            return app

        app = asyncio.run(scenario())
        assert app.return_code == 0

    def test_remove_of_unknown_pane_is_ignored(self, tmp_path):
        app = DirWindowManagerApp(store=WindowStore(), root=str(tmp_path), working_dir=str(tmp_path))
        app.remove_pane("never-drawn")
