"""Configuration schema for dirwm."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class WatchConfig(BaseModel):
    """Watched directory tree."""

    root: str = "./fs"
    join_timeout_s: float = 2.0


class DisplayConfig(BaseModel):
    """Terminal front end."""

    quit_key: str = "q"
    tag_suffix: str = "New Del Look"


class LoggingConfig(BaseModel):
    """File logging; the terminal belongs to the UI."""

    level: str = "INFO"
    file: str = "~/.dirwm/dirwm.log"
    rotation: str = "1 MB"

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()


class Config(BaseSettings):
    """Root configuration for dirwm."""

    watch: WatchConfig = Field(default_factory=WatchConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def root_path(self) -> Path:
        """Get expanded watch root."""
        return Path(self.watch.root).expanduser()

    @property
    def log_path(self) -> Path:
        return Path(self.logging.file).expanduser()

    model_config = ConfigDict(
        env_prefix="DIRWM_",
        env_nested_delimiter="__",
        extra="ignore",
    )
