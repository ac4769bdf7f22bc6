"""Filesystem scanner: discover windows under the watched root."""

from __future__ import annotations

import errno
import os

from loguru import logger

from dirwm.errors import ScanError
from dirwm.windows.model import CONTENT_FILE, DEFAULT_TAG_SUFFIX, TAG_FILE, Window, default_tag


def window_dir(root: str, window_id: str) -> str:
    return os.path.join(root, *window_id.split("/"))


def window_id_for(root: str, path: str) -> str | None:
    """Map a directory path to its window id.

    Returns None for the root itself and for paths outside the root.
    """
    rel = os.path.relpath(os.path.abspath(path), os.path.abspath(root))
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return None
    return rel.replace(os.sep, "/")


def strip_backup_suffix(path: str) -> str:
    """Map an editor backup name (``content~``) to the file it shadows."""
    return path[:-1] if path.endswith("~") else path


def stat_path(path: str) -> os.stat_result | None:
    """Stat ``path``, treating a vanished entry as None.

    Errors other than not-exists propagate.
    """
    try:
        return os.stat(strip_backup_suffix(path))
    except FileNotFoundError:
        return None
    except NotADirectoryError:
        return None
    except OSError as exc:
        if exc.errno == errno.ENOENT:
            return None
        raise


def read_content(directory: str) -> str:
    try:
        with open(os.path.join(directory, CONTENT_FILE), "r", encoding="utf-8", errors="replace") as fh:
            return fh.read()
    except OSError:
        return ""


def read_tag(directory: str, working_dir: str, suffix: str = DEFAULT_TAG_SUFFIX) -> str:
    try:
        with open(os.path.join(directory, TAG_FILE), "r", encoding="utf-8", errors="replace") as fh:
            return fh.read().strip()
    except OSError:
        return default_tag(directory, working_dir, suffix)


def read_window(root: str, window_id: str, working_dir: str, suffix: str = DEFAULT_TAG_SUFFIX) -> Window:
    """Build a Window from disk using best-effort reads."""
    directory = window_dir(root, window_id)
    return Window(
        id=window_id,
        origin_pwd=working_dir,
        tag=read_tag(directory, working_dir, suffix),
        content=read_content(directory),
    )


def list_window_ids(root: str, top: str | None = None) -> list[str]:
    """Walk ``top`` (default: the root) and return every directory as a window id.

    The root itself is skipped. Walk errors raise ScanError.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    start = top or root
    ids: list[str] = []
    try:
        if top is not None:
            window_id = window_id_for(root, top)
            if window_id is not None:
                ids.append(window_id)
        for dirpath, dirnames, _ in os.walk(start, onerror=_raise):
            for name in dirnames:
                window_id = window_id_for(root, os.path.join(dirpath, name))
                if window_id is not None:
                    ids.append(window_id)
    except OSError as exc:
        raise ScanError(f"Failed to scan {start}: {exc}") from exc
    return sorted(ids)


def scan_windows(root: str, working_dir: str, suffix: str = DEFAULT_TAG_SUFFIX) -> list[Window]:
    """One-shot walk of the root returning the initial window set."""
    ids = list_window_ids(root)
    logger.info(f"[scan] Found {len(ids)} window(s) under {root}")
    return [read_window(root, window_id, working_dir, suffix) for window_id in ids]
