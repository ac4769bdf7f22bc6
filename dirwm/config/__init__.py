"""Configuration module for dirwm."""

from dirwm.config.loader import get_config_path, load_config, save_config
from dirwm.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
