"""Grid components."""

from termmon.components.border import ROUNDED, BorderGlyphs, BorderRenderer
from termmon.components.text_group import PositionedTextGroup, TextFragment

__all__ = [
    "BorderGlyphs",
    "BorderRenderer",
    "PositionedTextGroup",
    "ROUNDED",
    "TextFragment",
]
