"""Terminal text utilities: ANSI stripping, grapheme segmentation, width checks.

Every grid cell holds exactly one printable unit.  The helpers here decide
what a "unit" is (a grapheme cluster) and whether it is printable (exactly
one terminal column).
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"              # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"   # APC
)


def strip_ansi(text: str) -> str:
    """Remove embedded escape sequences from *text*."""
    if "\x1b" not in text:
        return text
    return _STRIP_RE.sub("", text)


# ---------------------------------------------------------------------------
# Graphemes
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    if text.isascii():
        return list(text)
    return list(grapheme.graphemes(text))


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone combining marks are zero width.
    """
    if not g:
        return 0

    cp = ord(g[0])
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0

    if len(g) == 1:
        return max(_wcwidth.wcwidth(g), 0)

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcswidth(g), _wcwidth.wcwidth(g[0]), 0)


def is_printable_unit(char: str) -> bool:
    """Return ``True`` if *char* is one grapheme cluster one column wide."""
    if not char:
        return False
    if len(char) > 1 and grapheme.length(char) != 1:
        return False
    return grapheme_width(char) == 1


def sanitize(text: str) -> str:
    """Reduce *text* to printable units so every grapheme fits one cell.

    Escape sequences are removed, control and zero-width graphemes become
    spaces, and wide graphemes become ``?``.
    """
    units = []
    for g in graphemes(strip_ansi(text)):
        if is_printable_unit(g):
            units.append(g)
        elif grapheme_width(g) == 0:
            units.append(" ")
        else:
            units.append("?")
    return "".join(units)
