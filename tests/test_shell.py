import io
from typing import List

import pytest
from PIL import Image

from ascii_art.config import Config
from ascii_art.errors import InvalidCommandError
from ascii_art.matching.table import TableState
from ascii_art.rendering.outputs import ConsoleOutput, HtmlOutput, OutputDispatcher
from ascii_art.shell.commands import CommandProcessor, parse_char_arg
from ascii_art.shell.state import ShellState


class Harness:
    def __init__(self, tmp_path, rasterizer, chars: str = ".@"):
        self.cfg = Config.load(str(tmp_path / "cfg.json"))
        self.cfg.update({"charset": {"default": chars}, "image": {"path": None}})
        self.stream = io.StringIO()
        self.html_path = tmp_path / "out.html"
        outputs = OutputDispatcher()
        outputs.register("console", ConsoleOutput(self.stream))
        outputs.register("html", HtmlOutput(str(self.html_path)))
        self.state = ShellState(self.cfg, rasterizer=rasterizer, outputs=outputs)
        self.lines: List[str] = []
        self.commands = CommandProcessor(self.state, echo=self.lines.append)

    def run(self, line: str) -> bool:
        return self.commands.handle(line)


@pytest.fixture
def shell(tmp_path, rasterizer) -> Harness:
    return Harness(tmp_path, rasterizer)


def _save_image(tmp_path, size, color=(255, 255, 255)) -> str:
    path = tmp_path / "img.png"
    Image.new("RGB", size, color).save(path)
    return str(path)


def test_parse_char_arg_forms() -> None:
    assert parse_char_arg("space") == [" "]
    assert parse_char_arg("x") == ["x"]
    assert parse_char_arg("a-c") == ["a", "b", "c"]
    assert parse_char_arg("c-a") == ["a", "b", "c"]
    assert len(parse_char_arg("all")) == 95


@pytest.mark.parametrize("arg", ["", "ab", "a-a", "a-", "\t", "é"])
def test_parse_char_arg_rejects(arg: str) -> None:
    with pytest.raises(InvalidCommandError):
        parse_char_arg(arg)


def test_chars_lists_sorted(shell) -> None:
    shell.run("add :")
    shell.run("chars")
    assert shell.lines == [". : @"]


def test_add_and_remove_ranges(shell) -> None:
    shell.run("add a-c")
    assert {"a", "b", "c"} <= shell.state.table.charset()
    shell.run("remove c-b")
    assert shell.state.table.charset() == frozenset(".@a")


def test_bad_add_format(shell) -> None:
    shell.run("add hello")
    assert shell.lines == ["Did not add due to incorrect format."]
    shell.run("remove hello")
    assert shell.lines[-1] == "Did not remove due to incorrect format."


def test_remove_missing_char_follows_config(tmp_path, rasterizer) -> None:
    h = Harness(tmp_path, rasterizer)
    h.state.table.normalize()
    h.run("remove z")
    assert h.state.table.state is TableState.DIRTY

    h.cfg.update({"charset": {"remove_marks_dirty": False}})
    state = ShellState(h.cfg, rasterizer=rasterizer)
    state.table.normalize()
    CommandProcessor(state, echo=h.lines.append).handle("remove z")
    assert state.table.state is TableState.NORMALIZED


def test_unknown_command(shell) -> None:
    assert shell.run("paint") is True
    assert shell.lines == ["Did not execute due to incorrect command."]


def test_exit_and_blank_lines(shell) -> None:
    assert shell.run("") is True
    assert shell.run("exit") is False


def test_resolution_bounds(shell, tmp_path) -> None:
    shell.run("image " + _save_image(tmp_path, (8, 4)))
    # 128 > width 8 -> reset to 2
    assert shell.state.resolution == 2
    shell.run("res up")
    shell.run("res up")
    assert shell.state.resolution == 8
    shell.run("res up")
    assert shell.lines[-1] == "Did not change resolution due to exceeding boundaries."
    shell.run("res down")
    shell.run("res down")
    assert shell.state.resolution == 2
    shell.run("res down")
    # min chars per row is width // height = 2
    assert shell.state.resolution == 2
    shell.run("res")
    assert shell.lines[-1] == "Resolution set to 2."
    shell.run("res sideways")
    assert shell.lines[-1] == "Did not change resolution due to incorrect format."


def test_image_load_failure_keeps_session(shell, tmp_path) -> None:
    shell.run("image " + str(tmp_path / "missing.png"))
    assert shell.lines == ["Did not execute due to problem with image file."]
    assert shell.state.image is None


def test_ascii_art_to_console(shell, tmp_path) -> None:
    shell.run("image " + _save_image(tmp_path, (4, 4), (0, 0, 0)))
    shell.run("asciiArt")
    assert shell.stream.getvalue() == "..\n..\n"


def test_ascii_art_to_html(shell, tmp_path) -> None:
    shell.run("image " + _save_image(tmp_path, (2, 2)))
    shell.run("output html")
    shell.run("asciiArt")
    assert "<pre>\n@@\n@@\n</pre>" in shell.html_path.read_text(encoding="utf-8")
    shell.run("output pdf")
    assert shell.lines[-1] == "Did not change output method due to incorrect format."


def test_ascii_art_needs_two_chars(shell, tmp_path) -> None:
    shell.run("image " + _save_image(tmp_path, (2, 2)))
    shell.run("remove .")
    shell.run("asciiArt")
    assert shell.lines[-1] == "Did not execute. Charset is too small."
    assert shell.stream.getvalue() == ""


def test_ascii_art_without_image(shell) -> None:
    shell.run("asciiArt")
    assert shell.lines == ["Did not execute due to problem with image file."]


def test_help_lists_commands(shell) -> None:
    shell.run("help")
    assert "asciiArt" in shell.lines[0]


def test_ascii_art_rejects_tiles_taller_than_image(shell, tmp_path) -> None:
    shell.run("image " + _save_image(tmp_path, (65, 40), (0, 0, 0)))
    shell.run("res down")
    assert shell.state.resolution == 1
    shell.run("asciiArt")
    assert "taller than padded image height" in shell.lines[-1]
    assert shell.stream.getvalue() == ""


def test_state_starts_from_config_getters(tmp_path, rasterizer) -> None:
    h = Harness(tmp_path, rasterizer)
    h.cfg.update({"image": {"resolution": 16}, "output": {"mode": "html"}})
    state = ShellState(h.cfg, rasterizer=rasterizer)
    assert state.resolution == h.cfg.resolution == 16
    assert state.output_mode == h.cfg.output_mode == "html"
