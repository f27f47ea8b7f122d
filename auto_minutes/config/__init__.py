"""Configuration module -- exports Settings and load_config."""

from auto_minutes.config.loader import load_config
from auto_minutes.config.settings import LLMBackend, Settings

__all__ = ["LLMBackend", "Settings", "load_config"]
