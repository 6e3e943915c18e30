#!/usr/bin/env python3
# ascii_art/rendering/algorithm.py
"""
Image -> character grid.

Pipeline:
1. Freeze a normalized snapshot of the glyph table (fails fast on a bad charset).
2. Pad the image to power-of-two dimensions.
3. Split it into square tiles, `resolution` tiles per row.
4. Tile brightness, memoized per run by tile content.
5. Nearest-brightness character per tile.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from ascii_art.errors import InvalidResolutionError
from ascii_art.imaging.brightness import tile_brightness
from ascii_art.imaging.grid import ImageLike, as_pixels, pad, split
from ascii_art.matching.table import GlyphBrightnessTable

__all__ = ["AsciiArtAlgorithm", "CharGrid", "render", "tile_size_for"]

log = logging.getLogger(__name__)

CharGrid = List[List[str]]
TileKey = Tuple[Tuple[int, ...], str]


def tile_size_for(padded_width: int, resolution: int, padded_height: Optional[int] = None) -> int:
    """
    Side of one tile for `resolution` characters per row.
    Resolutions that do not divide the padded width exactly are rejected, and
    so are tiles taller than padded_height when it is given.
    """
    if resolution <= 0:
        raise InvalidResolutionError(f"resolution must be positive, got {resolution}")
    if resolution > padded_width:
        raise InvalidResolutionError(
            f"resolution {resolution} exceeds padded image width {padded_width}"
        )
    if padded_width % resolution:
        raise InvalidResolutionError(
            f"resolution {resolution} does not divide padded image width {padded_width}"
        )
    size = padded_width // resolution
    if padded_height is not None and size > padded_height:
        raise InvalidResolutionError(
            f"resolution {resolution} gives {size}px tiles, taller than padded image height {padded_height}"
        )
    return size


def _tile_key(tile: np.ndarray) -> TileKey:
    digest = hashlib.sha1(np.ascontiguousarray(tile).tobytes()).hexdigest()
    return tuple(tile.shape), digest


class AsciiArtAlgorithm:
    """One image, one resolution, one (shared) glyph table."""

    def __init__(self, image: ImageLike, resolution: int, table: GlyphBrightnessTable):
        self.image = as_pixels(image)
        self.resolution = int(resolution)
        self.table = table
        self.cache_hits = 0
        self.cache_misses = 0

    def run(self) -> CharGrid:
        snapshot = self.table.snapshot()

        padded = pad(self.image)
        height, width = padded.shape[:2]
        size = tile_size_for(width, self.resolution, height)
        rows, cols = height // size, width // size
        tiles = split(padded, size)

        memo: Dict[TileKey, float] = {}
        self.cache_hits = self.cache_misses = 0

        grid: CharGrid = []
        index = 0
        for _ in range(rows):
            line: List[str] = []
            for _ in range(cols):
                key = _tile_key(tiles[index])
                brightness = memo.get(key)
                if brightness is None:
                    brightness = tile_brightness(tiles[index])
                    memo[key] = brightness
                    self.cache_misses += 1
                else:
                    self.cache_hits += 1
                line.append(snapshot.match(brightness))
                index += 1
            grid.append(line)

        log.debug(
            "Rendered %dx%d grid (tile %dpx, %d unique tiles, %d memo hits)",
            rows, cols, size, self.cache_misses, self.cache_hits,
        )
        return grid


def render(
    image: ImageLike,
    resolution: int,
    charset: Union[GlyphBrightnessTable, Iterable[str]],
) -> CharGrid:
    """
    Convert image to a rows x resolution character grid.
    charset is either a live GlyphBrightnessTable or an iterable of characters.
    """
    table = charset if isinstance(charset, GlyphBrightnessTable) else GlyphBrightnessTable(charset)
    return AsciiArtAlgorithm(image, resolution, table).run()
