#!/usr/bin/env python3
# ascii_art/shell/commands.py
"""
Shell command handlers.

Each command mutates ShellState and reports through `echo`. Parse errors are
raised as InvalidCommandError; handle() turns any AsciiArtError into a
printed message so the loop keeps running.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ascii_art.errors import (
    AsciiArtError,
    ImageLoadError,
    InvalidCharsetError,
    InvalidCommandError,
)
from ascii_art.rendering.algorithm import AsciiArtAlgorithm
from ascii_art.shell.state import ShellState

__all__ = ["CommandProcessor", "HELP_TEXT", "parse_char_arg", "ASCII_MIN", "ASCII_MAX"]

log = logging.getLogger(__name__)

ASCII_MIN = 32
ASCII_MAX = 126

HELP_TEXT = (
    "Commands:\n"
    "  chars                 Show the current charset\n"
    "  add <c|a-z|all|space> Add characters\n"
    "  remove <...>          Remove characters (same forms as add)\n"
    "  res [up|down]         Show or change characters per row\n"
    "  image <path|url>      Load another image\n"
    "  output console|html   Choose where ASCII art goes\n"
    "  asciiArt              Render the current image\n"
    "  help                  Show this help\n"
    "  exit                  Quit\n"
)


def _printable(c: str) -> bool:
    return ASCII_MIN <= ord(c) <= ASCII_MAX


def parse_char_arg(arg: str) -> List[str]:
    """
    Characters named by an add/remove argument:
    'all', 'space', a single printable char, or a range like 'a-z' / 'z-a'.
    Raises InvalidCommandError for anything else.
    """
    if arg == "all":
        return [chr(i) for i in range(ASCII_MIN, ASCII_MAX + 1)]
    if arg == "space":
        return [" "]
    if len(arg) == 1 and _printable(arg):
        return [arg]
    if len(arg) == 3 and arg[1] == "-":
        start, end = arg[0], arg[2]
        if _printable(start) and _printable(end) and start != end:
            lo, hi = sorted((ord(start), ord(end)))
            return [chr(i) for i in range(lo, hi + 1)]
    raise InvalidCommandError(f"bad character argument {arg!r}")


class CommandProcessor:
    """Dispatches one line of shell input."""

    def __init__(
        self,
        state: ShellState,
        echo: Callable[[str], None] = print,
        error: Optional[Callable[[str], None]] = None,
    ):
        self.state = state
        self.echo = echo
        self.error = error or echo
        self._commands: Dict[str, Callable[[str], None]] = {
            "chars": self._chars,
            "add": self._add,
            "remove": self._remove,
            "res": self._res,
            "image": self._image,
            "output": self._output,
            "asciiArt": self._ascii_art,
            "help": self._help,
        }

    def execute(self, line: str) -> bool:
        """Run one command. Returns False when the shell should exit."""
        parts = line.split()
        if not parts:
            return True
        name = parts[0]
        arg = parts[1] if len(parts) > 1 else ""
        if name == "exit":
            return False
        handler = self._commands.get(name)
        if handler is None:
            raise InvalidCommandError("Did not execute due to incorrect command.")
        handler(arg)
        return True

    def handle(self, line: str) -> bool:
        """execute() with errors reported through `error`."""
        try:
            return self.execute(line)
        except AsciiArtError as e:
            log.debug("Command %r failed: %s", line, e)
            self.error(str(e))
            return True

    # ------------- charset -------------

    def _chars(self, arg: str) -> None:
        chars = sorted(self.state.table.charset())
        if chars:
            self.echo(" ".join(chars))

    def _add(self, arg: str) -> None:
        try:
            chars = parse_char_arg(arg)
        except InvalidCommandError:
            raise InvalidCommandError("Did not add due to incorrect format.") from None
        for c in chars:
            self.state.table.insert(c)

    def _remove(self, arg: str) -> None:
        try:
            chars = parse_char_arg(arg)
        except InvalidCommandError:
            raise InvalidCommandError("Did not remove due to incorrect format.") from None
        for c in chars:
            self.state.table.remove(c)

    # ------------- resolution -------------

    def _res(self, arg: str) -> None:
        s = self.state
        if arg == "":
            self.echo(f"Resolution set to {s.resolution}.")
            return
        if arg == "up":
            new = s.resolution * 2
            ok = s.image is None or new <= s.image_width
        elif arg == "down":
            new = s.resolution // 2
            min_chars = max(1, s.image_width // s.image_height) if s.image is not None else 1
            ok = new >= min_chars
        else:
            raise InvalidCommandError("Did not change resolution due to incorrect format.")

        if ok:
            s.resolution = new
            self.echo(f"Resolution set to {s.resolution}.")
        else:
            self.echo("Did not change resolution due to exceeding boundaries.")

    # ------------- image / output -------------

    def _image(self, arg: str) -> None:
        if not arg:
            raise InvalidCommandError("Did not change image due to incorrect format.")
        try:
            self.state.load_image(arg)
        except ImageLoadError:
            raise ImageLoadError("Did not execute due to problem with image file.") from None

    def _output(self, arg: str) -> None:
        if arg not in self.state.outputs.modes():
            raise InvalidCommandError("Did not change output method due to incorrect format.")
        self.state.output_mode = arg

    def _ascii_art(self, arg: str) -> None:
        s = self.state
        if len(s.table) < 2:
            raise InvalidCharsetError("Did not execute. Charset is too small.")
        if s.image is None:
            raise ImageLoadError("Did not execute due to problem with image file.")
        grid = AsciiArtAlgorithm(s.image, s.resolution, s.table).run()
        s.outputs.out(s.output_mode, grid)

    def _help(self, arg: str) -> None:
        self.echo(HELP_TEXT.rstrip("\n"))
