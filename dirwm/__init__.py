"""dirwm - a terminal window manager backed by a directory tree."""

__version__ = "0.1.0"
