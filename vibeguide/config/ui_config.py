"""
vibeguide UI configuration.

Handles persistence of UI preferences: theme, whether the guide opens with
leading blank rows, and whether blocks are sized by streamer name.
Config is stored in ~/.config/vibeguide/ui_config.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .constants import VIBEGUIDE_CONFIG_DIR

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "vibeguide-dark",
    "include_leading_blank_rows": True,
    "size_by_name": False,
}


def get_ui_config_path() -> Path:
    """
    Get path to UI config file.

    Returns:
        Path to ~/.config/vibeguide/ui_config.json
    """
    VIBEGUIDE_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return VIBEGUIDE_CONFIG_DIR / "ui_config.json"


def load_ui_config() -> dict[str, Any]:
    """
    Load UI configuration from file.

    Returns:
        Config dict, or defaults if file doesn't exist or is invalid
    """
    path = get_ui_config_path()
    if path.exists():
        try:
            config = json.loads(path.read_text())
            if isinstance(config, dict):
                return {**DEFAULT_CONFIG, **config}
        except (json.JSONDecodeError, OSError) as e:
            logger.debug(f"Ignoring unreadable UI config {path}: {e}")
    return DEFAULT_CONFIG.copy()


def save_ui_config(config: dict[str, Any]) -> None:
    """
    Save UI configuration to file.

    Args:
        config: Configuration dict to save
    """
    path = get_ui_config_path()
    try:
        path.write_text(json.dumps(config, indent=2) + "\n")
    except OSError as e:
        # Config is non-critical
        logger.warning(f"Could not save UI config to {path}: {e}")


def get_theme() -> str:
    return str(load_ui_config().get("theme", DEFAULT_CONFIG["theme"]))


def set_theme(theme_name: str) -> None:
    config = load_ui_config()
    config["theme"] = theme_name
    save_ui_config(config)


def get_include_leading_blank_rows() -> bool:
    """Session flag: start the guide with blank rows above the first channel."""
    return bool(load_ui_config().get("include_leading_blank_rows", True))


def set_include_leading_blank_rows(enabled: bool) -> None:
    config = load_ui_config()
    config["include_leading_blank_rows"] = bool(enabled)
    save_ui_config(config)


def get_size_by_name() -> bool:
    return bool(load_ui_config().get("size_by_name", False))


def set_size_by_name(enabled: bool) -> None:
    config = load_ui_config()
    config["size_by_name"] = bool(enabled)
    save_ui_config(config)
