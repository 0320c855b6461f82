"""Keyboard-driven color selection.

The dashboard has a two-phase color mode: digits pick the text color while
in ``FOREGROUND`` mode and the background color while in ``BACKGROUND``
mode; the space key toggles between the two.  The selected SGR prefixes are
written ahead of every flushed frame.
"""

from __future__ import annotations

from enum import Enum

ESC = "\x1b"
RESET = f"{ESC}[0m"


class ColorMode(Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"


# Digits 1-8 map onto the eight standard colors (black, red, green, yellow,
# blue, magenta, cyan, white); 9 resets the text color.
FOREGROUND_CODES: dict[str, str] = {
    **{str(i + 1): f"{ESC}[3{i}m" for i in range(8)},
    "9": RESET,
}

BACKGROUND_CODES: dict[str, str] = {
    str(i + 1): f"{ESC}[4{i}m" for i in range(8)
}

_CODES: dict[ColorMode, dict[str, str]] = {
    ColorMode.FOREGROUND: FOREGROUND_CODES,
    ColorMode.BACKGROUND: BACKGROUND_CODES,
}

_HINTS: dict[ColorMode, str] = {
    ColorMode.FOREGROUND: "[Text Color(1-9)]",
    ColorMode.BACKGROUND: "[Background Color(1-8)]",
}


class ColorStateMachine:
    """Tracks the active color mode and the prefix selected for each mode."""

    def __init__(self) -> None:
        self.mode: ColorMode = ColorMode.FOREGROUND
        self._selections: dict[ColorMode, str] = {
            ColorMode.FOREGROUND: "",
            ColorMode.BACKGROUND: "",
        }

    def advance(self) -> ColorMode:
        """Toggle FOREGROUND <-> BACKGROUND and return the new mode."""
        if self.mode is ColorMode.FOREGROUND:
            self.mode = ColorMode.BACKGROUND
        else:
            self.mode = ColorMode.FOREGROUND
        return self.mode

    def select(self, key: str) -> bool:
        """Select the color bound to *key* for the current mode.

        Keys without a binding in the current mode are ignored and return
        ``False``.
        """
        code = _CODES[self.mode].get(key)
        if code is None:
            return False
        self._selections[self.mode] = code
        return True

    def current_prefixes(self) -> tuple[str, str]:
        return (
            self._selections[ColorMode.FOREGROUND],
            self._selections[ColorMode.BACKGROUND],
        )

    def hint(self) -> str:
        return _HINTS[self.mode]
