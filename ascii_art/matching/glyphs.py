#!/usr/bin/env python3
# ascii_art/matching/glyphs.py
"""
Glyph rasterizer.

Draws one character in black on a square white canvas with Pillow and returns
a boolean bitmap where True marks cells the ink left uncovered. A blank glyph
is therefore all True (brightest), a dense one like '@' mostly False.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

__all__ = ["GlyphRasterizer", "DEFAULT_FONT_CANDIDATES"]

log = logging.getLogger(__name__)

# Monospace faces tried in order when no font_path is configured.
DEFAULT_FONT_CANDIDATES = (
    "cour.ttf",
    "Courier New.ttf",
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
)


class GlyphRasterizer:
    """Callable char -> (size, size) bool array. Deterministic, cached."""

    def __init__(
        self,
        font_path: Optional[str] = None,
        size: int = 16,
        candidates: Sequence[str] = DEFAULT_FONT_CANDIDATES,
    ):
        if size < 1:
            raise ValueError(f"glyph size must be >= 1, got {size}")
        self.size = int(size)
        self.font = self._load_font(font_path, candidates)
        self._cache: Dict[str, np.ndarray] = {}

    def _load_font(self, font_path: Optional[str], candidates: Sequence[str]):
        names = [font_path] if font_path else list(candidates)
        for name in names:
            try:
                return ImageFont.truetype(name, self.size)
            except OSError:
                log.debug("Font %s not available", name)
        if font_path:
            log.warning("Could not open font %s, using Pillow built-in font", font_path)
        return ImageFont.load_default()

    def __call__(self, c: str) -> np.ndarray:
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        cached = self._cache.get(c)
        if cached is not None:
            return cached

        img = Image.new("L", (self.size, self.size), 255)
        draw = ImageDraw.Draw(img)
        left, top, right, bottom = draw.textbbox((0, 0), c, font=self.font)
        x = (self.size - (right - left)) // 2 - left
        y = (self.size - (bottom - top)) // 2 - top
        draw.text((x, y), c, fill=0, font=self.font)

        bitmap = np.asarray(img, dtype=np.uint8) > 127
        bitmap.setflags(write=False)
        self._cache[c] = bitmap
        return bitmap
