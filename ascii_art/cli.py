#!/usr/bin/env python3
# ascii_art/cli.py
"""
Entry point for the ASCII art generator.
With an image argument, renders once and exits; otherwise starts the shell.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ascii_art.config import Config
from ascii_art.errors import AsciiArtError
from ascii_art.logging_conf import setup_logging
from ascii_art.rendering.algorithm import AsciiArtAlgorithm
from ascii_art.shell.state import ShellState
from ascii_art.version import version_info


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ascii-art", description="Image -> ASCII art by glyph brightness")
    p.add_argument("image", nargs="?", help="image path or http(s) URL; omit to start the shell")
    p.add_argument("--resolution", type=int, default=None, help="characters per row (divisor of the padded width); reset to 2 when wider than the image")
    p.add_argument("--charset", type=str, default=None, help="candidate characters, at least two")
    p.add_argument("--output", choices=("console", "html"), default=None, help="output method")
    p.add_argument("--html-path", default=None, help="file written by --output html")
    p.add_argument("--config", default=None, help="config file path")
    p.add_argument("--version", action="version", version=version_info())
    return p


def _overrides(args: argparse.Namespace) -> dict:
    partial: dict = {"image": {}, "charset": {}, "output": {}}
    if args.resolution is not None:
        partial["image"]["resolution"] = args.resolution
    if args.charset:
        partial["charset"]["default"] = args.charset
    if args.output:
        partial["output"]["mode"] = args.output
    if args.html_path:
        partial["output"]["html_path"] = args.html_path
    return partial


def run_once(state: ShellState, source: str) -> None:
    state.load_image(source)
    grid = AsciiArtAlgorithm(state.image, state.resolution, state.table).run()
    state.outputs.out(state.output_mode, grid)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config.load(args.config)
    cfg.update(_overrides(args))
    setup_logging(cfg)

    if args.image:
        try:
            run_once(ShellState(cfg), args.image)
        except AsciiArtError as e:
            print(f"ascii-art: {e}", file=sys.stderr)
            return 1
        return 0

    from ascii_art.shell.session import AsciiArtShell
    AsciiArtShell(cfg).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
