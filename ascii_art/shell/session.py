#!/usr/bin/env python3
# ascii_art/shell/session.py
"""prompt_toolkit read-eval loop for the ASCII art shell."""

from __future__ import annotations

import os
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.shortcuts import print_formatted_text

from ascii_art.config import Config
from ascii_art.shell.commands import CommandProcessor
from ascii_art.shell.state import ShellState
from ascii_art.styles import make_style

PROMPT = FormattedText([("class:prompt", ">>> ")])


def _history(cfg: Config) -> History:
    path = cfg["ui"].get("history_file")
    if not path:
        return InMemoryHistory()
    path = os.path.expanduser(path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    return FileHistory(path)


class AsciiArtShell:
    def __init__(self, cfg: Config, state: Optional[ShellState] = None, session: Optional[PromptSession] = None):
        self.cfg = cfg
        self.style = make_style(cfg)
        self.state = state or ShellState(cfg)
        self.commands = CommandProcessor(self.state, echo=self._echo, error=self._error)
        self.session = session or PromptSession(history=_history(cfg), style=self.style)

    def _echo(self, msg: str) -> None:
        print_formatted_text(FormattedText([("class:info", msg)]), style=self.style)

    def _error(self, msg: str) -> None:
        print_formatted_text(FormattedText([("class:error", msg)]), style=self.style)

    def run(self) -> None:
        if self.state.image is None:
            self.state.load_default_image()
        while True:
            try:
                line = self.session.prompt(PROMPT)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not self.commands.handle(line.strip()):
                break
