"""Terminal front end."""

from dirwm.tui.render import PaneRenderer, PaneSink

__all__ = ["PaneRenderer", "PaneSink"]
