"""Single-row flow layout.

Panes are packed left to right in snapshot order. Geometry is recomputed from
window content on every pass, so identical content always yields identical
panes.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from dirwm.windows.model import Pane, Window

# Columns between the left edges of neighbouring panes, on top of pane width.
PANE_GAP = 2
# Title line, blank line, size line and one spare row.
CHROME_ROWS = 4


def pane_geometry(window: Window) -> tuple[int, int, str]:
    """Return ``(width, height, title)`` for a window."""
    lines = window.content.split("\n")
    title = f"{window.id} {window.tag}"
    longest = max(len(line) for line in lines)
    width = max(len(title), longest) + 1
    height = len(lines) + CHROME_ROWS
    return width, height, title


def pane_text(window: Window) -> str:
    """Text drawn inside a pane."""
    width, height, title = pane_geometry(window)
    return f"{title}\n\n{window.content}\nw: {width}, h: {height}"


def flow_layout(widths: Sequence[int]) -> list[tuple[int, int]]:
    """Return the ``(x, y)`` origin of each pane."""
    origins: list[tuple[int, int]] = []
    x = 0
    for width in widths:
        origins.append((x, 0))
        x += width + PANE_GAP
    return origins


def layout_panes(windows: Iterable[Window]) -> list[Pane]:
    """Compute every pane for an ordered window snapshot."""
    ordered = list(windows)
    geometry = [pane_geometry(window) for window in ordered]
    origins = flow_layout([width for width, _, _ in geometry])
    panes: list[Pane] = []
    for window, (width, height, title), (x, y) in zip(ordered, geometry, origins):
        panes.append(
            Pane(
                id=window.id,
                x=x,
                y=y,
                width=width,
                height=height,
                title=title,
                body=pane_text(window),
            )
        )
    return panes
