"""Fixed-size character grid: the unit of rendering state.

A ``Grid`` is a rectangular matrix of ``Cell`` objects.  Writes outside the
grid are clipped silently so layout code can be written relative to an
anchor without bounds checks; malformed content raises a ``RenderError``.

A cell is exactly one terminal column, so wide graphemes (CJK, most emoji)
are rejected like control characters and every serialized row is
``columns`` wide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from termmon.utils import graphemes, is_printable_unit, strip_ansi

__all__ = [
    "Cell",
    "Grid",
    "InvalidCharacter",
    "InvalidText",
    "RenderError",
    "TerminalSize",
]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RenderError(ValueError):
    """A layout component handed the grid content it must never produce."""


class InvalidText(RenderError):
    """Raised when ``set_text`` receives empty text."""


class InvalidCharacter(RenderError):
    """Raised when ``set_char`` receives anything but one printable unit."""


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class TerminalSize(NamedTuple):
    rows: int
    columns: int


@dataclass
class Cell:
    char: str = " "
    style: str | None = None

    def render(self) -> str:
        return self.style + self.char if self.style else self.char


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class Grid:
    """A ``rows`` x ``columns`` matrix of cells, initialised to spaces."""

    def __init__(self, rows: int, columns: int) -> None:
        self.rows = max(rows, 0)
        self.columns = max(columns, 0)
        self._data: list[list[Cell]] = [
            [Cell() for _ in range(self.columns)] for _ in range(self.rows)
        ]

    @classmethod
    def for_size(cls, size: TerminalSize) -> Grid:
        return cls(size.rows, size.columns)

    @property
    def size(self) -> TerminalSize:
        return TerminalSize(self.rows, self.columns)

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell(self, row: int, column: int) -> Cell:
        """Return the cell at (*row*, *column*).

        Reads are not clipped: an out-of-range position raises ``IndexError``.
        """
        if not self.in_bounds(row, column):
            raise IndexError(f"cell ({row}, {column}) outside {self.rows}x{self.columns} grid")
        return self._data[row][column]

    # -- writes -------------------------------------------------------------

    def set_char(
        self,
        row: int,
        column: int,
        char: str,
        style: str | None = None,
    ) -> None:
        """Write one character, ignoring positions outside the grid."""
        if not is_printable_unit(char):
            raise InvalidCharacter(f"Character {char!r} is not a single printable unit.")
        if not self.in_bounds(row, column):
            return
        self._data[row][column] = Cell(char, style)

    def set_text(
        self,
        row: int,
        column: int,
        text: str,
        vertical: bool = False,
        style: str | None = None,
    ) -> None:
        """Write *text* one grapheme at a time from (*row*, *column*).

        Each grapheme advances the column, or the row when *vertical* is set,
        and is clipped on its own, so a partly visible string still renders
        its visible part.  Embedded escape sequences are stripped first.
        """
        clean = strip_ansi(text)
        if not clean:
            raise InvalidText(f"Text {text!r} is empty.")

        for offset, char in enumerate(graphemes(clean)):
            if vertical:
                self.set_char(row + offset, column, char, style)
            else:
                self.set_char(row, column + offset, char, style)

    # -- serialization ------------------------------------------------------

    def lines(self) -> list[str]:
        return ["".join(cell.render() for cell in row) for row in self._data]

    def to_string(self) -> str:
        return "\n".join(self.lines())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, columns={self.columns})"
