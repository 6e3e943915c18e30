#!/usr/bin/env python3
# ascii_art/imaging/brightness.py
"""
Brightness estimation for image tiles and glyph bitmaps.
Both return a float in [0, 1].
"""

from __future__ import annotations

import numpy as np

__all__ = ["LUMA_WEIGHTS", "tile_brightness", "glyph_brightness"]

# Rec. 709 luma (0.2126, 0.7152, 0.0722) scaled to integers summing to 10000,
# so white sums to exactly 1.0.
LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.int64)
_LUMA_SCALE = int(LUMA_WEIGHTS.sum())


def tile_brightness(tile: np.ndarray) -> float:
    """Mean luma of an (h, w, 3) RGB tile divided by 255."""
    arr = np.asarray(tile, dtype=np.int64)
    pixels = arr.shape[0] * arr.shape[1]
    if pixels == 0:
        raise ValueError("empty tile")
    total = int((arr @ LUMA_WEIGHTS).sum())
    return total / (pixels * 255 * _LUMA_SCALE)


def glyph_brightness(bitmap: np.ndarray) -> float:
    """Fraction of True cells in a boolean glyph bitmap."""
    cells = np.asarray(bitmap, dtype=bool)
    if cells.size == 0:
        raise ValueError("empty glyph bitmap")
    return int(np.count_nonzero(cells)) / cells.size
