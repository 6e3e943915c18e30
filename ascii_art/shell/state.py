#!/usr/bin/env python3
# ascii_art/shell/state.py
"""Mutable session state for the ASCII art shell."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ascii_art.config import Config
from ascii_art.errors import ImageLoadError
from ascii_art.imaging.loader import ImageLoader
from ascii_art.matching.glyphs import GlyphRasterizer
from ascii_art.matching.table import GlyphBrightnessTable, Rasterizer
from ascii_art.rendering.outputs import ConsoleOutput, HtmlOutput, OutputDispatcher

log = logging.getLogger(__name__)


@dataclass
class ShellState:
    cfg: Config
    rasterizer: Optional[Rasterizer] = None
    loader: Optional[ImageLoader] = None
    outputs: Optional[OutputDispatcher] = None

    # Session
    table: GlyphBrightnessTable = field(init=False)
    resolution: int = field(init=False)
    output_mode: str = field(init=False)
    image: Optional[np.ndarray] = None
    image_path: Optional[str] = None

    def __post_init__(self):
        cs = self.cfg["charset"]
        if self.rasterizer is None:
            self.rasterizer = GlyphRasterizer(cs.get("font_path"), int(cs.get("glyph_size", 16)))
        self.table = GlyphBrightnessTable(
            cs.get("default", ""),
            rasterizer=self.rasterizer,
            dirty_on_absent_remove=bool(cs.get("remove_marks_dirty", True)),
        )

        if self.loader is None:
            n = self.cfg["network"]
            self.loader = ImageLoader(
                n["user_agent"],
                connect_timeout=float(n["connect_timeout_s"]),
                read_timeout=float(n["read_timeout_s"]),
                retries=int(n["retries"]),
            )

        if self.outputs is None:
            o = self.cfg["output"]
            self.outputs = OutputDispatcher()
            self.outputs.register("console", ConsoleOutput())
            self.outputs.register("html", HtmlOutput(o["html_path"], o["font_name"], o["font_size_px"]))

        self.resolution = self.cfg.resolution
        self.output_mode = self.cfg.output_mode

    # ------------- image -------------

    @property
    def image_width(self) -> int:
        return 0 if self.image is None else int(self.image.shape[1])

    @property
    def image_height(self) -> int:
        return 0 if self.image is None else int(self.image.shape[0])

    def load_image(self, source: str) -> None:
        """Replace the current image. Raises ImageLoadError, keeps the old image."""
        self.image = self.loader.load(source)
        self.image_path = source
        if self.resolution > self.image_width:
            self.resolution = 2
        log.info("Loaded %s (%dx%d)", source, self.image_width, self.image_height)

    def load_default_image(self) -> None:
        path = self.cfg["image"].get("path")
        if not path:
            return
        try:
            self.load_image(path)
        except ImageLoadError as e:
            log.warning("Default image not loaded: %s", e)
