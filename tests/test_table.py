import pytest

from ascii_art.errors import InvalidCharsetError
from ascii_art.matching.glyphs import GlyphRasterizer
from ascii_art.matching.table import BrightnessSnapshot, GlyphBrightnessTable, TableState


def test_new_table_starts_dirty(rasterizer) -> None:
    table = GlyphBrightnessTable(".:@", rasterizer=rasterizer)
    assert table.state is TableState.DIRTY
    assert table.charset() == frozenset(".:@")
    assert table.raw_brightness(":") == pytest.approx(0.25)


def test_normalization_spans_zero_to_one(rasterizer) -> None:
    table = GlyphBrightnessTable("abc", rasterizer=rasterizer)
    table.normalize()
    assert table.state is TableState.NORMALIZED
    values = table.snapshot().values
    assert min(values.values()) == 0.0
    assert max(values.values()) == 1.0
    assert values["b"] == pytest.approx(0.5)


def test_match_picks_nearest(rasterizer) -> None:
    table = GlyphBrightnessTable(".:#@", rasterizer=rasterizer)
    assert table.match(0.0) == "."
    assert table.match(0.3) == ":"
    assert table.match(0.8) == "#"
    assert table.match(1.0) == "@"


def test_match_tie_prefers_lower_code_point(rasterizer) -> None:
    # '.' -> 0.0 and '@' -> 1.0, 0.5 is equidistant
    table = GlyphBrightnessTable("@.", rasterizer=rasterizer)
    assert table.match(0.5) == "."

    # 'o' and 'x' share a brightness
    table = GlyphBrightnessTable("x.o@", rasterizer=rasterizer)
    assert table.match(0.5) == "o"


def test_match_is_deterministic(rasterizer) -> None:
    table = GlyphBrightnessTable(".:o#@", rasterizer=rasterizer)
    first = [table.match(v / 20) for v in range(21)]
    second = [table.match(v / 20) for v in range(21)]
    assert first == second


def test_insert_invalidates_and_changes_matches(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer)
    assert table.match(0.3) == "."
    assert table.state is TableState.NORMALIZED

    table.insert(":")
    assert table.state is TableState.DIRTY
    assert table.match(0.3) == ":"


def test_insert_existing_character_recomputes(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer)
    rasterizer.levels["@"] = 0.5
    table.insert("@")
    assert table.raw_brightness("@") == pytest.approx(0.5)
    assert len(table) == 2


def test_renormalizes_after_removing_an_extreme(rasterizer) -> None:
    table = GlyphBrightnessTable(".:#@", rasterizer=rasterizer)
    assert table.brightness("#") == pytest.approx(0.75)
    table.remove("@")
    # ':' 0.25 .. '#' 0.75 over a 0.0 .. 0.75 span
    assert table.brightness("#") == 1.0
    assert table.brightness(":") == pytest.approx(1 / 3)


def test_remove_absent_marks_dirty_by_default(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer)
    table.normalize()
    table.remove("z")
    assert table.state is TableState.DIRTY
    assert table.charset() == frozenset(".@")


def test_remove_absent_can_keep_normalization(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer, dirty_on_absent_remove=False)
    table.normalize()
    table.remove("z")
    assert table.state is TableState.NORMALIZED
    table.remove("@")
    assert table.state is TableState.DIRTY


def test_snapshot_is_frozen_against_later_mutation(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer)
    snap = table.snapshot()
    table.insert(":")
    assert snap.match(0.3) == "."
    assert table.match(0.3) == ":"


@pytest.mark.parametrize("chars", ["", "@"])
def test_too_few_characters_fail(rasterizer, chars: str) -> None:
    table = GlyphBrightnessTable(chars, rasterizer=rasterizer)
    with pytest.raises(InvalidCharsetError):
        table.match(0.5)


def test_identical_brightness_fails(rasterizer) -> None:
    table = GlyphBrightnessTable("ox", rasterizer=rasterizer)
    with pytest.raises(InvalidCharsetError):
        table.match(0.5)
    assert table.state is TableState.DIRTY


def test_multi_character_strings_are_rejected(rasterizer) -> None:
    table = GlyphBrightnessTable(".@", rasterizer=rasterizer)
    calls = rasterizer.calls
    with pytest.raises(ValueError):
        table.insert("ab")
    with pytest.raises(ValueError):
        table.insert("")
    assert rasterizer.calls == calls
    assert table.charset() == frozenset(".@")


def test_constructor_rejects_multi_character_entries(rasterizer) -> None:
    with pytest.raises(ValueError):
        GlyphBrightnessTable([".", "ab"], rasterizer=rasterizer)
    assert rasterizer.calls == 1


def test_snapshot_from_raw_directly() -> None:
    snap = BrightnessSnapshot.from_raw({"a": 0.2, "b": 0.6, "c": 1.0})
    assert snap.values["a"] == 0.0
    assert snap.values["c"] == 1.0
    assert snap.match(0.49) == "b"


def test_default_rasterizer_blank_is_brightest() -> None:
    rast = GlyphRasterizer(size=16)
    blank = rast(" ")
    dense = rast("@")
    assert blank.shape == (16, 16)
    assert blank.dtype == bool
    assert blank.all()
    assert not dense.all()
    assert rast("@") is dense

    table = GlyphBrightnessTable(" @", rasterizer=rast)
    assert table.match(1.0) == " "
    assert table.match(0.0) == "@"
