#!/usr/bin/env python3
# ascii_art/rendering/outputs.py
"""
Output backends for rendered character grids.

- Common API: OutputBackend.out(grid)
- Backends register on an OutputDispatcher by mode name ("console", "html").
"""

from __future__ import annotations

import html
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO

from ascii_art.errors import InvalidCommandError

__all__ = [
    "OutputBackend",
    "ConsoleOutput",
    "HtmlOutput",
    "OutputDispatcher",
    "grid_to_lines",
]

log = logging.getLogger(__name__)

CharGrid = List[List[str]]


def grid_to_lines(grid: CharGrid) -> List[str]:
    return ["".join(row) for row in grid]


# -------------------------
# Backends
# -------------------------

class OutputBackend:
    """Interface for all outputs."""
    name: str = "base"

    def out(self, grid: CharGrid) -> None:
        raise NotImplementedError


class ConsoleOutput(OutputBackend):
    """Print one line per grid row."""

    name = "console"

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def out(self, grid: CharGrid) -> None:
        stream = self.stream or sys.stdout
        for line in grid_to_lines(grid):
            stream.write(line + "\n")
        stream.flush()


class HtmlOutput(OutputBackend):
    """Write the grid into a standalone HTML page inside a <pre> block."""

    name = "html"

    def __init__(self, path: str = "out.html", font_name: str = "Courier New", font_size_px: int = 8):
        self.path = path
        self.font_name = font_name
        self.font_size_px = int(font_size_px)

    def document(self, grid: CharGrid) -> str:
        body = "\n".join(html.escape(line) for line in grid_to_lines(grid))
        font = html.escape(self.font_name, quote=True)
        return (
            "<!doctype html>\n"
            "<html>\n<head>\n"
            '  <meta charset="utf-8">\n'
            "  <title>ASCII Art</title>\n"
            "  <style>\n"
            "    html, body { margin: 0; background: #fff; color: #000; }\n"
            "    pre {\n"
            "      margin: 0;\n"
            "      white-space: pre;\n"
            f"      font-family: '{font}', monospace;\n"
            f"      font-size: {self.font_size_px}px;\n"
            f"      line-height: {self.font_size_px}px;\n"
            "      letter-spacing: 0;\n"
            "    }\n"
            "  </style>\n"
            "</head>\n<body>\n"
            "<pre>\n" + body + "\n</pre>\n"
            "</body>\n</html>\n"
        )

    def out(self, grid: CharGrid) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(self.document(grid))
        log.info("Wrote %d rows to %s", len(grid), self.path)


# -------------------------
# Dispatcher
# -------------------------

@dataclass
class OutputDispatcher:
    """
    Output strategy holder.
    Console output is always available; use register() to add more.
    """
    backends: Dict[str, OutputBackend] = field(default_factory=dict)

    def __post_init__(self):
        self.backends.setdefault("console", ConsoleOutput())

    def register(self, mode: str, backend: OutputBackend) -> None:
        self.backends[mode] = backend

    def modes(self) -> List[str]:
        return sorted(self.backends)

    def get(self, mode: str) -> OutputBackend:
        backend = self.backends.get(mode)
        if backend is None:
            raise InvalidCommandError(f"Unknown output mode: {mode}")
        return backend

    def out(self, mode: str, grid: CharGrid) -> None:
        self.get(mode).out(grid)
