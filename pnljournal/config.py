"""Configuration loading for PnL Journal.

Settings live in a TOML file at ``~/.config/pnljournal/config.toml``;
the ``PNLJOURNAL_CONFIG`` environment variable points elsewhere.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "pnljournal"
CONFIG_ENV_VAR = "PNLJOURNAL_CONFIG"

DEFAULT_CONFIG = {
    "journal": {
        "default": "Main",
        "initial_capital": 500000.0,
    },
    "storage": {
        "db_path": str(CONFIG_DIR / "pnljournal.db"),
    },
    "display": {
        "entries_per_page": 20,
    },
}


class ConfigError(Exception):
    """Raised when the configuration file cannot be read."""


def get_config_path() -> Path:
    """Resolve the configuration file location."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "config.toml"


def _merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration, falling back to defaults for missing keys.

    Args:
        path: Config file path. Defaults to ``get_config_path()``.

    Returns:
        Configuration dictionary.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    return _merge(DEFAULT_CONFIG, user_config)


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write the default configuration to disk.

    Returns:
        Path of the written file.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    logger.info("Wrote config template to %s", config_path)
    return config_path


def get_db_path(config: dict) -> Path:
    return Path(config["storage"]["db_path"]).expanduser()
