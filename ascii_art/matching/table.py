#!/usr/bin/env python3
# ascii_art/matching/table.py
"""
Glyph brightness table.

Holds the raw brightness of every candidate character and answers
nearest-brightness queries against the min-max normalized values.

State machine:
- DIRTY       raw values changed since the last normalization (initial state).
- NORMALIZED  a BrightnessSnapshot of the current key set is available.

insert()/remove() move the table to DIRTY; match()/snapshot() move it back
to NORMALIZED before answering. Normalization is table-wide: the snapshot is
rebuilt from the raw values every time, never patched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

import numpy as np

from ascii_art.errors import InvalidCharsetError
from ascii_art.imaging.brightness import glyph_brightness
from ascii_art.matching.glyphs import GlyphRasterizer

__all__ = ["TableState", "BrightnessSnapshot", "GlyphBrightnessTable"]

log = logging.getLogger(__name__)

Rasterizer = Callable[[str], np.ndarray]


class TableState(Enum):
    DIRTY = "dirty"
    NORMALIZED = "normalized"


@dataclass(frozen=True)
class BrightnessSnapshot:
    """Immutable normalized view of a table at one point in time."""

    values: Mapping[str, float]
    # Sorted by code point so the first strict minimum wins ties.
    order: Tuple[Tuple[str, float], ...]

    @classmethod
    def from_raw(cls, raw: Mapping[str, float]) -> "BrightnessSnapshot":
        if len(raw) < 2:
            raise InvalidCharsetError(
                f"charset needs at least 2 characters, has {len(raw)}"
            )
        lo = min(raw.values())
        hi = max(raw.values())
        if hi == lo:
            raise InvalidCharsetError(
                "all characters in the charset have the same brightness"
            )
        span = hi - lo
        values = {c: (v - lo) / span for c, v in raw.items()}
        order = tuple(sorted(values.items()))
        return cls(MappingProxyType(values), order)

    def match(self, brightness: float) -> str:
        """Character nearest to brightness; lower code point on ties."""
        best_char, best_value = self.order[0]
        best_diff = abs(best_value - brightness)
        for c, v in self.order[1:]:
            diff = abs(v - brightness)
            if diff < best_diff:
                best_char, best_diff = c, diff
        return best_char


class GlyphBrightnessTable:
    """
    Mutable, session-scoped charset with lazy normalization.

    rasterizer: char -> bool bitmap; defaults to a GlyphRasterizer.
    dirty_on_absent_remove: whether remove() of a missing char still
        invalidates the current normalization.
    """

    def __init__(
        self,
        charset: Iterable[str] = (),
        rasterizer: Optional[Rasterizer] = None,
        dirty_on_absent_remove: bool = True,
    ):
        self._rasterize: Rasterizer = rasterizer or GlyphRasterizer()
        self.dirty_on_absent_remove = dirty_on_absent_remove
        self._raw: Dict[str, float] = {}
        self._snapshot: Optional[BrightnessSnapshot] = None
        for c in charset:
            c = self._check_char(c)
            self._raw[c] = self._raw_brightness_of(c)

    # ----------------
    # Internal helpers
    # ----------------

    @staticmethod
    def _check_char(c: str) -> str:
        if not isinstance(c, str) or len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return c

    def _raw_brightness_of(self, c: str) -> float:
        return glyph_brightness(self._rasterize(c))

    def _invalidate(self) -> None:
        self._snapshot = None

    # ----------
    # Inspection
    # ----------

    @property
    def state(self) -> TableState:
        return TableState.DIRTY if self._snapshot is None else TableState.NORMALIZED

    def charset(self) -> frozenset:
        return frozenset(self._raw)

    def __len__(self) -> int:
        return len(self._raw)

    def __contains__(self, c: object) -> bool:
        return c in self._raw

    def raw_brightness(self, c: str) -> float:
        return self._raw[c]

    def brightness(self, c: str) -> float:
        """Normalized brightness of c against the current charset."""
        return self.snapshot().values[c]

    # ---------
    # Mutation
    # ---------

    def insert(self, c: str) -> None:
        """Add c or recompute it if already present."""
        c = self._check_char(c)
        self._raw[c] = self._raw_brightness_of(c)
        self._invalidate()

    def remove(self, c: str) -> None:
        """Drop c; missing characters are ignored."""
        removed = self._raw.pop(c, None) is not None
        if removed or self.dirty_on_absent_remove:
            self._invalidate()

    # -------
    # Queries
    # -------

    def normalize(self) -> None:
        """Bring the table to NORMALIZED. Raises InvalidCharsetError."""
        if self._snapshot is None:
            self._snapshot = BrightnessSnapshot.from_raw(self._raw)
            log.debug("Normalized brightness of %d characters", len(self._raw))

    def snapshot(self) -> BrightnessSnapshot:
        """Normalized, immutable view usable for a whole render pass."""
        self.normalize()
        assert self._snapshot is not None
        return self._snapshot

    def match(self, brightness: float) -> str:
        """Character whose normalized brightness is nearest to brightness."""
        return self.snapshot().match(brightness)
