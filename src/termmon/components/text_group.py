"""Positioned text group - fragments laid out relative to an anchor."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from termmon.grid import Grid


class TextFragment(NamedTuple):
    row_offset: int
    column_offset: int
    text: str


class PositionedTextGroup:
    """An anchor coordinate plus text fragments at offsets from it.

    Offsets may be negative, which lets a group anchored near the bottom of
    the screen grow upwards.
    """

    def __init__(self, anchor_row: int, anchor_column: int) -> None:
        self.anchor_row = anchor_row
        self.anchor_column = anchor_column
        self.fragments: list[TextFragment] = []

    def add_fragment(self, row_offset: int, column_offset: int, text: str) -> PositionedTextGroup:
        self.fragments.append(TextFragment(row_offset, column_offset, text))
        return self

    def render(self, grid: Grid) -> None:
        for fragment in self.fragments:
            grid.set_text(
                self.anchor_row + fragment.row_offset,
                self.anchor_column + fragment.column_offset,
                fragment.text,
            )
