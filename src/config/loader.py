"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  - static defaults checked into the repo
  2. .env file           - local developer overrides (not committed)
  3. Environment vars    - set at deploy time

:func:`load_config` reads the YAML file first, then deep-merges the
environment-derived values from :class:`Settings` on top.
"""

from pathlib import Path

import yaml

from src.config.settings import Settings

_DEFAULT_COLLECTIONS = {"programs": "programs", "episodes": "episodes"}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file is not an
              error; built-in defaults are used instead.
        settings: Settings to merge; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    yaml_config.setdefault("store", {})
    yaml_config["store"].setdefault("collections", dict(_DEFAULT_COLLECTIONS))

    settings = settings or Settings()
    # Only the sections _build_all reads; cache and app options stay on Settings.
    env_overrides = {
        "store": {
            "endpoint": settings.os_endpoint,
            "timeout_seconds": settings.store_timeout_seconds,
        },
        "views": {
            "search_include_video_url": settings.search_include_video_url,
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
