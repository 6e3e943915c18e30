#!/usr/bin/env python3
# ascii_art/errors.py
"""
Error kinds raised by the ASCII art engine and its shell.
All of them derive from AsciiArtError so callers can catch one type.
"""

from __future__ import annotations

__all__ = [
    "AsciiArtError",
    "InvalidCharsetError",
    "InvalidResolutionError",
    "ImageLoadError",
    "InvalidCommandError",
]


class AsciiArtError(Exception):
    """Base class for all engine errors."""


class InvalidCharsetError(AsciiArtError):
    """Charset too small, or every glyph has the same brightness."""


class InvalidResolutionError(AsciiArtError):
    """Resolution is not a positive divisor of the padded image width."""


class ImageLoadError(AsciiArtError):
    """Image could not be read, fetched or decoded."""


class InvalidCommandError(AsciiArtError):
    """Shell input that does not parse."""
