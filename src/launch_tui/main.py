#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from .app import LaunchesApp
from .config import DEFAULT_THEME, load_config, load_themes, setup_logging

logger = logging.getLogger("launches")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="SpaceX Launches TUI")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--theme",
        type=str,
        help="Set theme for this run (see the command palette for the full list)",
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    available_themes = load_themes(config)
    theme_name = args.theme or config.get("theme") or DEFAULT_THEME

    if theme_name not in available_themes:
        print(
            f"Theme '{theme_name}' not found, falling back to {DEFAULT_THEME}.",
            file=sys.stderr,
        )
        theme_name = DEFAULT_THEME

    logger.info("Using theme: %s", theme_name)

    try:
        app = LaunchesApp(theme=theme_name, config=config)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
