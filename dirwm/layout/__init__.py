"""Flow layout engine."""

from dirwm.layout.flow import flow_layout, layout_panes, pane_geometry, pane_text

__all__ = ["flow_layout", "layout_panes", "pane_geometry", "pane_text"]
