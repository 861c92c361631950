import logging
import os
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger(__name__)


def find_config_file() -> str:
    """
    Find the configuration file in standard locations.

    Look for config in the following locations (in order):
    1. ./hn_probe.toml (current directory)
    2. ~/.config/hn_probe/config.toml (user config directory)
    3. /etc/hn_probe/config.toml (system config directory)

    Returns:
        Path to the first config file found, or "" if no config file exists
    """
    current_dir = Path("./hn_probe.toml")
    if current_dir.exists():
        return str(current_dir)

    user_config = Path.home() / ".config" / "hn_probe" / "config.toml"
    if user_config.exists():
        return str(user_config)

    system_config = Path("/etc/hn_probe/config.toml")
    if system_config.exists():
        return str(system_config)

    return ""


def default_config() -> Dict[str, Dict[str, Any]]:
    return {
        "api": {
            "base_url": "https://hacker-news.firebaseio.com/v0",
            # 0 leaves the transport default in place
            "timeout": 0,
        },
        "suite": {
            "min_top_stories": 100,
            "max_top_stories": 500,
            "sample_size": 10,
            "score_sample_size": 20,
            "score_ceiling": 10000,
            "min_max_item_id": 1_000_000,
            "max_story_age_seconds": 365 * 24 * 60 * 60,
            "missing_item_id": 999999999999,
        },
        "logging": {"level": "INFO", "file": ""},
        "events": {"path": ""},
    }


def load_config(config_path: str = "") -> Dict[str, Any]:
    """
    Load configuration from a TOML file.

    Args:
        config_path: Path to the configuration file. If not provided,
                    the function will search for a config file in standard locations.

    Returns:
        Dictionary with configuration values
    """
    if not config_path:
        config_path = find_config_file()

    config = default_config()

    # Merge known sections over the defaults; unknown sections are ignored
    if config_path and os.path.exists(config_path):
        try:
            user_config = toml.load(config_path)

            for section in config:
                if section not in user_config:
                    continue
                if not isinstance(user_config[section], dict):
                    raise ValueError(f"[{section}] must be a table, got {user_config[section]!r}")
                config[section].update(user_config[section])
        except (toml.TomlDecodeError, OSError, ValueError) as e:
            logger.warning("Error loading config file %s: %s", config_path, e)
            return default_config()

    return config
