"""Border component - draws a rectangular frame onto a grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from termmon.grid import Grid, TerminalSize


class BorderGlyphs(NamedTuple):
    top_left: str = "╭"
    top_right: str = "╮"
    bottom_left: str = "╰"
    bottom_right: str = "╯"
    horizontal: str = "─"
    vertical: str = "│"


ROUNDED = BorderGlyphs()


class BorderRenderer:
    """Draws corners, horizontal edges and vertical edges around the grid."""

    def __init__(self, glyphs: BorderGlyphs = ROUNDED) -> None:
        self.glyphs = glyphs

    def draw(self, grid: Grid, size: TerminalSize) -> None:
        rows, columns = size.rows, size.columns
        if rows < 2 or columns < 2:
            return

        g = self.glyphs
        last_row = rows - 1
        last_col = columns - 1

        grid.set_text(0, 0, g.top_left)
        grid.set_text(0, last_col, g.top_right)
        grid.set_text(last_row, last_col, g.bottom_right)
        grid.set_text(last_row, 0, g.bottom_left)

        # A 2-wide or 2-tall frame is all corners.
        if columns > 2:
            run = g.horizontal * (columns - 2)
            grid.set_text(last_row, 1, run)
            grid.set_text(0, 1, run)
        if rows > 2:
            run = g.vertical * (rows - 2)
            grid.set_text(1, 0, run, vertical=True)
            grid.set_text(1, last_col, run, vertical=True)
