#!/usr/bin/env python3
# ascii_art/imaging/grid.py
"""
Image normalization and tiling.

Images are handled as read-only numpy arrays of shape (H, W, 3), dtype uint8.
- pad() grows an image to power-of-two dimensions on a white background.
- split() cuts an image into square tiles in row-major order.
"""

from __future__ import annotations

from typing import List, Tuple, Union

import numpy as np
from PIL import Image

__all__ = [
    "WHITE",
    "as_pixels",
    "pixel_at",
    "next_pow2",
    "pad",
    "split",
    "grid_shape",
]

WHITE = 255  # channel value of the padding background

ImageLike = Union[Image.Image, np.ndarray]


def as_pixels(img: ImageLike) -> np.ndarray:
    """Return an immutable (H, W, 3) uint8 array for a Pillow image or array."""
    if isinstance(img, Image.Image):
        if img.mode != "RGB":
            img = img.convert("RGB")
        arr = np.array(img, dtype=np.uint8)
    else:
        arr = np.array(img, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"expected an (H, W, 3) RGB array, got shape {arr.shape}")
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise ValueError("image must be at least 1x1")
    arr.setflags(write=False)
    return arr


def pixel_at(img: np.ndarray, row: int, col: int) -> Tuple[int, int, int]:
    r, g, b = img[row, col].tolist()
    return r, g, b


def next_pow2(n: int) -> int:
    """Smallest power of two >= n. Returns 1 for n <= 0."""
    if n <= 0:
        return 1
    return 1 << (int(n) - 1).bit_length()


def pad(img: ImageLike) -> np.ndarray:
    """
    Center the image on a white canvas whose sides are powers of two.
    Odd surplus goes to the right/bottom margin.
    """
    arr = as_pixels(img)
    h, w = arr.shape[:2]
    new_w, new_h = next_pow2(w), next_pow2(h)
    if new_w == w and new_h == h:
        return arr

    out = np.full((new_h, new_w, 3), WHITE, dtype=np.uint8)
    x_off = (new_w - w) // 2
    y_off = (new_h - h) // 2
    out[y_off:y_off + h, x_off:x_off + w] = arr
    out.setflags(write=False)
    return out


def grid_shape(img: np.ndarray, tile_size: int) -> Tuple[int, int]:
    """(rows, cols) of tiles split() produces for this image and tile size."""
    if tile_size < 1:
        raise ValueError(f"tile_size must be >= 1, got {tile_size}")
    h, w = img.shape[:2]
    return -(-h // tile_size), -(-w // tile_size)


def split(img: ImageLike, tile_size: int) -> List[np.ndarray]:
    """
    Slice the image into tile_size x tile_size tiles, row by row.
    Positions past the right/bottom edge of a boundary tile are white.
    """
    arr = as_pixels(img)
    rows, cols = grid_shape(arr, tile_size)
    h, w = arr.shape[:2]

    # Extend to a whole number of tiles so every slice below is full size
    full_h, full_w = rows * tile_size, cols * tile_size
    if full_h != h or full_w != w:
        arr = np.pad(
            arr,
            ((0, full_h - h), (0, full_w - w), (0, 0)),
            mode="constant",
            constant_values=WHITE,
        )

    tiles: List[np.ndarray] = []
    for y in range(0, full_h, tile_size):
        for x in range(0, full_w, tile_size):
            tile = arr[y:y + tile_size, x:x + tile_size]
            tile.setflags(write=False)
            tiles.append(tile)
    return tiles
