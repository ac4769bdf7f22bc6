"""Tests for the typer CLI."""

import pytest
from typer.testing import CliRunner

from dirwm import __version__
from dirwm.cli.commands import DEMO_WINDOWS, app
from dirwm.config import loader
from tests.conftest import make_window

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(loader, "get_config_path", lambda: tmp_path / "config.json")


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestList:
    def test_lists_windows_with_geometry(self, root):
        make_window(root, "a", content="x\ny", tag="T")
        make_window(root, "b", tag="U")
        result = runner.invoke(app, ["list", "--root", str(root)])
        assert result.exit_code == 0, result.output
        assert "a" in result.output
        assert "U" in result.output

    def test_empty_root(self, root):
        result = runner.invoke(app, ["list", "--root", str(root)])
        assert result.exit_code == 0
        assert "No windows" in result.output

    def test_missing_root_fails(self, tmp_path):
        result = runner.invoke(app, ["list", "--root", str(tmp_path / "missing")])
        assert result.exit_code == 1


class TestSeed:
    def test_creates_demo_windows(self, tmp_path):
        target = tmp_path / "demo"
        result = runner.invoke(app, ["seed", "--root", str(target)])
        assert result.exit_code == 0, result.output
        for name in DEMO_WINDOWS:
            assert (target / name / "content").is_file()
        assert (target / "date" / "tag").read_text(encoding="utf-8") == "Get Put"

    def test_keeps_existing_without_force(self, root):
        make_window(root, "date", content="mine")
        result = runner.invoke(app, ["seed", "--root", str(root)])
        assert result.exit_code == 0
        assert (root / "date" / "content").read_text(encoding="utf-8") == "mine"

    def test_force_overwrites(self, root):
        make_window(root, "date", content="mine")
        result = runner.invoke(app, ["seed", "--root", str(root), "--force"])
        assert result.exit_code == 0
        assert (root / "date" / "content").read_text(encoding="utf-8") != "mine"


class TestRun:
    def test_missing_root_fails_before_ui(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DIRWM_LOGGING__FILE", str(tmp_path / "dirwm.log"))
        result = runner.invoke(app, ["run", "--root", str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_scan_runs_after_root_watch_is_registered(self, root, tmp_path, monkeypatch):
        from dirwm.tui.app import DirWindowManagerApp
        from dirwm.watch.session import WatchSession
        from dirwm.windows import scanner

        monkeypatch.setenv("DIRWM_LOGGING__FILE", str(tmp_path / "dirwm.log"))
        calls: list[str] = []
        seeded: list[list[str]] = []
        real_open = WatchSession.open
        real_scan = scanner.scan_windows

        def recording_open(self):
            calls.append("watch")
            return real_open(self)

        def racing_scan(*args, **kwargs):
            calls.append("scan")
            # A window that appears while startup is in progress.
            make_window(root, "late", content="x")
            return real_scan(*args, **kwargs)

        def fake_run(self):
            seeded.append([window.id for window in self._initial_windows])

        monkeypatch.setattr(WatchSession, "open", recording_open)
        monkeypatch.setattr(scanner, "scan_windows", racing_scan)
        monkeypatch.setattr(DirWindowManagerApp, "run", fake_run)

        result = runner.invoke(app, ["run", "--root", str(root)])
        assert result.exit_code == 0, result.output
        assert calls == ["watch", "scan"]
        assert seeded == [["late"]]
