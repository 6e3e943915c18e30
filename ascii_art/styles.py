#!/usr/bin/env python3
# ascii_art/styles.py
"""
Style definitions for the ASCII art shell prompt.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style

from ascii_art.config import Config

_BASE_DARK = {
    "prompt": "fg:#00ff00 bold",
    "error": "fg:#ff5555",
    "info": "fg:#cccccc",
}
_BASE_LIGHT = {
    "prompt": "fg:#006600 bold",
    "error": "fg:#aa0000",
    "info": "fg:#333333",
}


def make_style(cfg: Config) -> Style:
    theme = cfg["ui"].get("theme", "auto")

    if theme == "light":
        return Style.from_dict(_BASE_LIGHT)
    if theme == "dark":
        return Style.from_dict(_BASE_DARK)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(_BASE_LIGHT)
    return Style.from_dict(_BASE_DARK)
