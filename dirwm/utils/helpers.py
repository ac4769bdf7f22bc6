"""Utility functions for dirwm."""

from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger

from dirwm.config.schema import Config


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_run(command: str, *args: str, timeout_s: float = 10.0) -> str:
    """Run a command and return its stdout.

    Any failure (missing binary, non-zero exit, timeout) yields
    ``command + "error"`` instead of raising.
    """
    try:
        result = subprocess.run(
            [command, *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_s,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"Command {command!r} failed: {exc}")
        return command + "error"
    return result.stdout


def setup_logging(config: Config) -> None:
    """Route loguru to the configured log file.

    The default stderr sink is dropped, since the terminal is owned by the UI
    while it runs.
    """
    logger.remove()
    log_path = config.log_path
    ensure_dir(log_path.parent)
    logger.add(
        log_path,
        level=config.logging.level,
        rotation=config.logging.rotation,
        enqueue=True,
        backtrace=False,
    )
