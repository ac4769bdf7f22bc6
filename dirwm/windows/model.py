"""Window data models."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_TAG_SUFFIX = "New Del Look"

CONTENT_FILE = "content"
TAG_FILE = "tag"


@dataclass(frozen=True)
class Window:
    """One window, backed by a directory under the watched root."""

    id: str
    origin_pwd: str
    tag: str
    content: str = ""

    def with_field(self, field_name: str, value: str) -> "Window":
        """Return a copy with ``content`` or ``tag`` replaced."""
        if field_name not in (CONTENT_FILE, TAG_FILE):
            raise ValueError(f"Unknown window field '{field_name}'")
        return replace(self, **{field_name: value})


@dataclass(frozen=True)
class Pane:
    """Rendered rectangle derived from a Window."""

    id: str
    x: int
    y: int
    width: int
    height: int
    title: str
    body: str


def default_tag(window_dir: str, working_dir: str, suffix: str = DEFAULT_TAG_SUFFIX) -> str:
    """Tag used when a window has no ``tag`` file."""
    if _same_path(window_dir, working_dir):
        return suffix
    return working_dir + suffix


def _same_path(a: str, b: str) -> bool:
    return os.path.realpath(a) == os.path.realpath(b)
