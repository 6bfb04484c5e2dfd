from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of the selection settings (unselect-all mode,
placeholder value, display palette) as a versioned JSON document in the
user data directory, with default fallback on missing or corrupted files.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from hierselect.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_SELECTION_COLORS,
    DEFAULT_UNSELECT_STRING,
)
from hierselect.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
# Explicit override; resolved under the user data directory on first use
CONFIG_FILE: Optional[str] = None


def get_config_file() -> str:
    """
    Resolve the settings file path.

    The user data directory is only created when the file is actually
    read or written, never at import time.

    Returns:
        str: Absolute path to config.json.
    """
    return CONFIG_FILE or os.path.join(get_user_data_dir(), "config.json")


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default selection settings (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Empty selection semantics
        "unselect_all_by_default": False,
        "unselect_string": DEFAULT_UNSELECT_STRING,

        # Presentation
        "selection_colors": dict(DEFAULT_SELECTION_COLORS),
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "log_level": "INFO",
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state merged over defaults, or the
                        default structure on failure.
    """
    default_state = get_default_app_state()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("Corrupted config file. Resetting to defaults.")
            return default_state

        state = default_state.copy()
        if isinstance(data.get("app_settings"), dict):
            state["app_settings"].update(data["app_settings"])
        if isinstance(data.get("last_session"), dict):
            state["last_session"].update(data["last_session"])

        state["version"] = CURRENT_CONFIG_VERSION
        return state

    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    config_file = get_config_file()
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config(state: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Retrieve the active settings (Last Session) directly.

    Args:
        state: Application state already loaded by the caller, if any.
    """
    if state is None:
        state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """
    Save the provided settings as the 'last_session'.
    """
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
