"""CLI commands for dirwm."""

from __future__ import annotations

import os
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from dirwm import __version__

app = typer.Typer(
    name="dirwm",
    help="dirwm - terminal windows backed by a directory tree",
    no_args_is_help=True,
)
console = Console()

# Demo windows: directory name -> command whose stdout becomes the content.
DEMO_WINDOWS: dict[str, tuple[str, ...]] = {
    "date": ("date",),
    "files": ("ls", "-1"),
    "system": ("uname", "-a"),
}
DEMO_TAGS: dict[str, str] = {
    "date": "Get Put",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"dirwm v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """dirwm entrypoint."""
    del version


def _fatal(message: str) -> NoReturn:
    logger.error(message)
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _working_dir() -> str:
    try:
        return os.getcwd()
    except OSError as exc:
        _fatal(f"Cannot resolve working directory: {exc}")


def _load(root: str, log_level: str = ""):
    from dirwm.config.loader import load_config

    config = load_config()
    if root:
        config.watch.root = root
    if log_level:
        config.logging.level = log_level.strip().upper()
    return config


@app.command()
def run(
    root: str = typer.Option("", "--root", "-r", help="Directory whose subdirectories are windows."),
    log_level: str = typer.Option("", "--log-level", help="Log level for the log file."),
) -> None:
    """Start the window manager."""
    from dirwm.errors import DirWMError
    from dirwm.tui.app import DirWindowManagerApp
    from dirwm.utils.helpers import setup_logging
    from dirwm.watch.session import WatchSession
    from dirwm.windows.scanner import scan_windows
    from dirwm.windows.store import WindowStore

    config = _load(root, log_level)
    setup_logging(config)

    working_dir = _working_dir()
    root_path = str(config.root_path.resolve())
    if not os.path.isdir(root_path):
        _fatal(f"Watch root {root_path} is not a directory")

    logger.info(f"Starting dirwm on {root_path} (cwd {working_dir})")
    try:
        with WatchSession(root_path, join_timeout_s=config.watch.join_timeout_s) as session:
            # Scan only once the root watch is live, so no window created in between is missed.
            windows = scan_windows(root_path, working_dir, config.display.tag_suffix)
            tui = DirWindowManagerApp(
                store=WindowStore(),
                root=root_path,
                working_dir=working_dir,
                windows=windows,
                session=session,
                quit_key=config.display.quit_key,
                tag_suffix=config.display.tag_suffix,
            )
            tui.run()
    except DirWMError as exc:
        _fatal(str(exc))

    if tui.return_code:
        _fatal(f"dirwm exited with status {tui.return_code}")
    logger.info("dirwm stopped")


@app.command("list")
def list_windows(
    root: str = typer.Option("", "--root", "-r", help="Directory whose subdirectories are windows."),
) -> None:
    """Scan the root once and print the windows with their pane geometry."""
    from dirwm.errors import DirWMError
    from dirwm.layout.flow import layout_panes
    from dirwm.windows.scanner import scan_windows
    from dirwm.windows.store import WindowStore

    config = _load(root)
    working_dir = _working_dir()
    root_path = str(config.root_path.resolve())
    if not os.path.isdir(root_path):
        _fatal(f"Watch root {root_path} is not a directory")

    try:
        windows = scan_windows(root_path, working_dir, config.display.tag_suffix)
    except DirWMError as exc:
        _fatal(str(exc))

    store = WindowStore()
    for window in windows:
        store.put(window)

    if not len(store):
        console.print(f"[yellow]No windows under {root_path}[/yellow]")
        return

    table = Table(title=f"Windows in {root_path}")
    table.add_column("id", style="cyan")
    table.add_column("tag")
    table.add_column("x", justify="right")
    table.add_column("w", justify="right")
    table.add_column("h", justify="right")
    snapshot = store.snapshot()
    for pane, window in zip(layout_panes(snapshot), snapshot):
        table.add_row(pane.id, window.tag, str(pane.x), str(pane.width), str(pane.height))
    console.print(table)


@app.command()
def seed(
    root: str = typer.Option("", "--root", "-r", help="Directory to populate with demo windows."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing demo windows."),
) -> None:
    """Create demo windows filled with command output."""
    from dirwm.utils.helpers import ensure_dir, safe_run
    from dirwm.windows.model import CONTENT_FILE, TAG_FILE

    config = _load(root)
    root_path = ensure_dir(config.root_path)

    for name, command in DEMO_WINDOWS.items():
        directory = root_path / name
        if directory.exists() and not force:
            console.print(f"  [dim]Skipped {name} (exists)[/dim]")
            continue
        ensure_dir(directory)
        (directory / CONTENT_FILE).write_text(safe_run(*command), encoding="utf-8")
        tag = DEMO_TAGS.get(name)
        if tag:
            (directory / TAG_FILE).write_text(tag, encoding="utf-8")
        console.print(f"  [dim]Created {name}[/dim]")

    console.print(f"[green]OK[/green] Demo windows in {root_path}")
