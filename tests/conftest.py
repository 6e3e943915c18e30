from typing import Dict

import numpy as np
import pytest

# Fraction of "on" cells per character for the fake rasterizer.
FAKE_LEVELS: Dict[str, float] = {
    " ": 1.0,
    ".": 0.0,
    "@": 1.0,
    ":": 0.25,
    "o": 0.5,
    "x": 0.5,
    "#": 0.75,
    "a": 0.1,
    "b": 0.2,
    "c": 0.3,
}


def make_bitmap(fraction: float, side: int = 10) -> np.ndarray:
    cells = np.zeros(side * side, dtype=bool)
    cells[: int(round(fraction * side * side))] = True
    return cells.reshape(side, side)


class FakeRasterizer:
    """Deterministic char -> bitmap lookup that counts calls."""

    def __init__(self, levels: Dict[str, float]):
        self.levels = dict(levels)
        self.calls = 0

    def __call__(self, c: str) -> np.ndarray:
        self.calls += 1
        return make_bitmap(self.levels[c])


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer(FAKE_LEVELS)


def solid(width: int, height: int, rgb=(255, 255, 255)) -> np.ndarray:
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = rgb
    return img
