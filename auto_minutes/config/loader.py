"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- Static defaults checked into the repo (optional)
  2. .env file           -- Local overrides (not committed)
  3. Environment vars    -- Set by the scheduler / CI job

``load_config()`` reads the YAML file first, then deep-merges the values
resolved by :class:`Settings` on top, so a default set in config.yaml can be
overridden per-environment.
"""

from pathlib import Path

import yaml

from auto_minutes.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Already-resolved settings; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "env": settings.app_env,
        },
        "llm": {
            "backend": settings.llm_backend,
            "available_backends": settings.get_available_llm_backends(),
            "max_tokens": settings.generation_max_tokens,
        },
        "source": {
            "item_source": settings.item_source,
        },
        "storage": {
            "backend": settings.storage_backend,
            "cache_dir": settings.cache_dir,
            "sqlite_path": settings.sqlite_path,
        },
        "site": {
            "site_dir": settings.site_dir,
            "collection_prefix": settings.collection_prefix,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
