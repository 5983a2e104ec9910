from __future__ import annotations

"""
Configuration Domain Management.

Holds the default visualizer settings and persists the user's preferred
settings as JSON inside the user data directory. Missing keys are filled
from defaults and unreadable files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from astviz.domain.constants import CURRENT_CONFIG_VERSION
from astviz.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_path() -> str:
    """Location of the persisted configuration file."""
    return os.path.join(get_user_data_dir(create=False), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Model (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Rendering
        "expansion_policy": "selective",
        "color": False,

        # Statistics
        "show_stats": False,
        "stats_style": "compact",

        # Python quoting
        "with_meta": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    Args:
        path: Config file to read. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: Configuration dictionary (defaults on any failure).
    """
    path = path or get_config_path()
    config = get_default_config()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config from {path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        logger.warning("Corrupted 'settings' section. Using defaults.")
        return config

    if data.get("version") != CURRENT_CONFIG_VERSION:
        logger.info(f"Config schema {data.get('version')!r} differs from {CURRENT_CONFIG_VERSION}; merging known keys.")

    for key, value in settings.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key '{key}'")
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: Settings to store (unknown keys are dropped).
        path: Target file. Defaults to the user data directory file.

    Returns:
        bool: True if the file was written.
    """
    path = path or get_config_path()
    known = get_default_config()
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "settings": {k: config[k] for k in known if k in config},
    }
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {path}")
    return True
