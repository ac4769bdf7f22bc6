"""Load and save the dirwm config file."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from dirwm.config.schema import Config


def get_config_path() -> Path:
    """Return the default config file location."""
    return Path.home() / ".dirwm" / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Load config from disk, falling back to defaults.

    Environment variables (``DIRWM_WATCH__ROOT`` ...) fill whatever the file
    leaves unset.
    """
    target = path or get_config_path()
    if not target.exists():
        return Config()

    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("config root must be an object")
        return Config(**payload)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning(f"Failed to load config from {target}: {exc}")
        return Config()


def save_config(config: Config, path: Path | None = None) -> None:
    """Write config to disk."""
    target = path or get_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(config.model_dump_json(indent=2), encoding="utf-8")
