"""Filesystem watching and event reconciliation."""

from dirwm.watch.reconciler import Reconciler, Scope
from dirwm.watch.session import WatchSession
from dirwm.watch.source import FsEvent, WatchSource

__all__ = ["FsEvent", "Reconciler", "Scope", "WatchSession", "WatchSource"]
