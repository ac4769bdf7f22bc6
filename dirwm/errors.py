"""Exception types shared across dirwm."""

from __future__ import annotations


class DirWMError(Exception):
    """Base error for fatal dirwm failures."""


class ScanError(DirWMError):
    """The startup directory walk failed."""


class WatchError(DirWMError):
    """A filesystem watch source could not be started or registered."""
