"""Utility functions for dirwm."""

from dirwm.utils.helpers import ensure_dir, safe_run, setup_logging

__all__ = ["ensure_dir", "safe_run", "setup_logging"]
