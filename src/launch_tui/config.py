from __future__ import annotations

import copy
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

from textual.theme import BUILTIN_THEMES, Theme

# --- Configuration ---
API_URL = "https://api.spacexdata.com/v3/launches"
PAGE_SIZE = 10
HTTP_TIMEOUT = 15
# Rows from the end of the list at which the next page is requested
NEAR_END_THRESHOLD = 3

CONFIG_PATH = os.path.expanduser("~/.config/launches/config.json")

REQUEST_HEADERS = {
    "User-Agent": "launches-tui/0.1",
    "Accept": "application/json",
}

DEFAULT_THEME = "textual-dark"

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]/[/] search, [b {color}]enter[/] details, "
        "[b {color}]n[/] more, [b {color}]v[/]/[b {color}]a[/] video/article"
    ),
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "source": "spacex",
    "sources": {
        "spacex": {
            "url": API_URL,
            "timeout": HTTP_TIMEOUT,
        },
    },
    "theme": DEFAULT_THEME,
    "ui": dict(UI_DEFAULTS),
}

# --- Logging ---
logger = logging.getLogger("launches")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging.

    The TUI owns the terminal, so debug output goes to a file under /tmp.
    """
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/launches_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists() -> None:
    """Write the default config file if the user's config file is not found."""
    if os.path.exists(CONFIG_PATH):
        return
    logger.info("Config file not found at %s, creating default.", CONFIG_PATH)
    save_config(DEFAULT_CONFIG)


def load_config() -> Dict[str, Any]:
    """Load the main configuration file, layered over the defaults."""
    ensure_config_file_exists()
    config = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(CONFIG_PATH, "r") as f:
            user_config = json.load(f)
        logger.info("Loaded config from %s", CONFIG_PATH)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return config

    if not isinstance(user_config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", CONFIG_PATH)
        return config

    return _merge(config, user_config)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def save_config(config: Dict[str, Any]) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
        with open(CONFIG_PATH, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", CONFIG_PATH)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", CONFIG_PATH, e)


def load_themes(config: Optional[Dict[str, Any]] = None) -> Dict[str, Theme]:
    """Return Textual's built-in themes merged with user-defined ones."""
    if config is None:
        config = load_config()
    themes: Dict[str, Theme] = dict(BUILTIN_THEMES)

    for name, definition in config.get("themes", {}).items():
        try:
            themes[name] = Theme(name=name, **definition)
        except Exception as e:
            logger.warning("Ignoring invalid theme definition for '%s': %s", name, e)

    return themes
