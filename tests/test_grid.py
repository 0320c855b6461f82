"""Tests for termmon.grid -- cell writes, clipping, and serialization."""

from __future__ import annotations

import pytest

from termmon.grid import (
    Cell,
    Grid,
    InvalidCharacter,
    InvalidText,
    RenderError,
    TerminalSize,
)


def snapshot(grid: Grid) -> list[list[Cell]]:
    return [[grid.cell(r, c) for c in range(grid.columns)] for r in range(grid.rows)]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_dimensions(self) -> None:
        grid = Grid(3, 5)
        assert grid.rows == 3
        assert grid.columns == 5
        assert grid.size == TerminalSize(3, 5)

    def test_initialised_to_spaces(self) -> None:
        grid = Grid(2, 4)
        assert grid.lines() == ["    ", "    "]

    def test_rectangular(self) -> None:
        grid = Grid(4, 7)
        assert all(len(line) == 7 for line in grid.lines())

    def test_for_size(self) -> None:
        grid = Grid.for_size(TerminalSize(rows=6, columns=9))
        assert (grid.rows, grid.columns) == (6, 9)

    def test_negative_dimensions_clamp_to_empty(self) -> None:
        grid = Grid(-1, 5)
        assert grid.rows == 0
        assert grid.to_string() == ""


# ---------------------------------------------------------------------------
# set_char
# ---------------------------------------------------------------------------


class TestSetChar:
    def test_write_then_read(self) -> None:
        grid = Grid(3, 3)
        grid.set_char(1, 2, "x", "\x1b[31m")
        cell = grid.cell(1, 2)
        assert cell.char == "x"
        assert cell.style == "\x1b[31m"

    def test_write_without_style(self) -> None:
        grid = Grid(2, 2)
        grid.set_char(0, 0, "a")
        assert grid.cell(0, 0) == Cell("a", None)

    @pytest.mark.parametrize("row,column", [(-1, 0), (0, -1), (3, 0), (0, 3), (10, 10)])
    def test_out_of_bounds_is_ignored(self, row: int, column: int) -> None:
        grid = Grid(3, 3)
        before = snapshot(grid)
        grid.set_char(row, column, "x")
        assert snapshot(grid) == before

    def test_empty_char_raises(self) -> None:
        with pytest.raises(InvalidCharacter):
            Grid(2, 2).set_char(0, 0, "")

    def test_multi_char_raises(self) -> None:
        with pytest.raises(InvalidCharacter):
            Grid(2, 2).set_char(0, 0, "ab")

    def test_control_char_raises(self) -> None:
        with pytest.raises(InvalidCharacter):
            Grid(2, 2).set_char(0, 0, "\n")

    def test_invalid_char_raises_even_out_of_bounds(self) -> None:
        with pytest.raises(InvalidCharacter):
            Grid(2, 2).set_char(9, 9, "ab")

    def test_combined_grapheme_is_one_unit(self) -> None:
        grid = Grid(1, 1)
        grid.set_char(0, 0, "e\u0301")
        assert grid.cell(0, 0).char == "e\u0301"

    def test_wide_char_raises(self) -> None:
        with pytest.raises(InvalidCharacter):
            Grid(1, 2).set_char(0, 0, "\u4e2d")

    def test_box_drawing_glyph(self) -> None:
        grid = Grid(1, 1)
        grid.set_char(0, 0, "╭")
        assert grid.lines() == ["╭"]

    def test_errors_are_value_errors(self) -> None:
        assert issubclass(InvalidCharacter, RenderError)
        assert issubclass(InvalidText, RenderError)
        assert issubclass(RenderError, ValueError)


# ---------------------------------------------------------------------------
# set_text
# ---------------------------------------------------------------------------


class TestSetText:
    def test_horizontal(self) -> None:
        grid = Grid(2, 6)
        grid.set_text(1, 1, "abc")
        assert grid.lines() == ["      ", " abc  "]

    def test_vertical(self) -> None:
        grid = Grid(4, 2)
        grid.set_text(1, 0, "xyz", vertical=True)
        assert grid.lines() == ["  ", "x ", "y ", "z "]

    def test_matches_per_char_writes(self) -> None:
        text = "hello"
        by_text = Grid(3, 8)
        by_char = Grid(3, 8)
        by_text.set_text(1, 5, text)
        for i, ch in enumerate(text):
            by_char.set_char(1, 5 + i, ch)
        assert by_text.lines() == by_char.lines()

    def test_vertical_matches_per_char_writes(self) -> None:
        text = "hello"
        by_text = Grid(4, 3)
        by_char = Grid(4, 3)
        by_text.set_text(-1, 2, text, vertical=True)
        for i, ch in enumerate(text):
            by_char.set_char(-1 + i, 2, ch)
        assert by_text.lines() == by_char.lines()

    def test_partial_clip_right(self) -> None:
        grid = Grid(1, 5)
        grid.set_text(0, 3, "abcdef")
        assert grid.lines() == ["   ab"]

    def test_partial_clip_left(self) -> None:
        grid = Grid(1, 5)
        grid.set_text(0, -2, "abcd")
        assert grid.lines() == ["cd   "]

    def test_partial_clip_bottom(self) -> None:
        grid = Grid(3, 1)
        grid.set_text(1, 0, "abc", vertical=True)
        assert grid.lines() == [" ", "a", "b"]

    def test_fully_out_of_bounds_is_ignored(self) -> None:
        grid = Grid(2, 2)
        before = snapshot(grid)
        grid.set_text(5, 0, "abc")
        grid.set_text(0, -10, "abc")
        assert snapshot(grid) == before

    def test_empty_text_raises(self) -> None:
        with pytest.raises(InvalidText):
            Grid(2, 2).set_text(0, 0, "")

    def test_text_of_only_escape_codes_raises(self) -> None:
        with pytest.raises(InvalidText):
            Grid(2, 2).set_text(0, 0, "\x1b[31m\x1b[0m")

    def test_embedded_escape_codes_are_stripped(self) -> None:
        grid = Grid(1, 4)
        grid.set_text(0, 0, "\x1b[32mok\x1b[0m")
        assert grid.lines() == ["ok  "]

    def test_style_applies_to_each_cell(self) -> None:
        grid = Grid(1, 3)
        grid.set_text(0, 0, "ab", style="\x1b[1m")
        assert grid.cell(0, 0).style == "\x1b[1m"
        assert grid.cell(0, 1).style == "\x1b[1m"
        assert grid.cell(0, 2).style is None


# ---------------------------------------------------------------------------
# Reads and serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_rows_joined_with_newline(self) -> None:
        grid = Grid(2, 2)
        grid.set_text(0, 0, "ab")
        grid.set_text(1, 0, "cd")
        assert grid.to_string() == "ab\ncd"
        assert str(grid) == "ab\ncd"

    def test_style_precedes_char(self) -> None:
        grid = Grid(1, 3)
        grid.set_char(0, 1, "x", "\x1b[31m")
        assert grid.to_string() == " \x1b[31mx "

    def test_no_trailing_newline(self) -> None:
        assert not Grid(3, 2).to_string().endswith("\n")

    def test_out_of_range_read_raises(self) -> None:
        with pytest.raises(IndexError):
            Grid(2, 2).cell(2, 0)
