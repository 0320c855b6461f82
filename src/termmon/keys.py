"""Keyboard input splitting and matching for the raw stdin stream.

A single read from a raw-mode terminal can carry several keypresses (fast
typing, pastes) or one multi-byte escape sequence (arrow keys, function
keys).  ``split_keys`` breaks a chunk into individual keys without
splitting escape sequences, and ``matches_key`` checks one key against a
named identifier such as ``"ctrl+c"`` or ``"space"``.
"""

from __future__ import annotations

from termmon.utils import graphemes

ESC = "\x1b"

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    space = "space"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


_SPECIAL_KEYS: dict[str, str] = {
    Key.space: " ",
}


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------


def _escape_sequence_length(data: str, start: int) -> int:
    """Return the length of the escape sequence beginning at *start*."""
    if start + 1 >= len(data):
        return 1

    intro = data[start + 1]

    # CSI: ESC [ params final-byte(0x40..0x7E)
    if intro == "[":
        pos = start + 2
        while pos < len(data):
            if 0x40 <= ord(data[pos]) <= 0x7E:
                return pos - start + 1
            pos += 1
        return len(data) - start

    # SS3: ESC O <char>
    if intro == "O":
        return min(3, len(data) - start)

    # OSC / DCS / APC: terminated by BEL or ST
    if intro in "]P_":
        pos = start + 2
        while pos < len(data):
            if data[pos] == "\x07":
                return pos - start + 1
            if data[pos] == ESC and pos + 1 < len(data) and data[pos + 1] == "\\":
                return pos - start + 2
            pos += 1
        return len(data) - start

    # Meta key: ESC followed by one character
    return 2


def split_keys(data: str) -> list[str]:
    """Split a raw input chunk into individual keys."""
    keys: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] == ESC:
            length = _escape_sequence_length(data, pos)
            keys.append(data[pos:pos + length])
            pos += length
            continue

        # Plain text up to the next escape, one grapheme per key
        end = data.find(ESC, pos)
        if end == -1:
            end = len(data)
        keys.extend(graphemes(data[pos:end]))
        pos = end
    return keys


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def raw_ctrl_char(key: str) -> str | None:
    """Return the control character for a key, or ``None`` if not applicable.

    For example, ``raw_ctrl_char("c")`` returns ``"\\x03"``.
    """
    if len(key) != 1:
        return None
    code = ord(key.lower())
    if ord("a") <= code <= ord("z"):
        return chr(code & 0x1F)
    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if the raw key *data* corresponds to *key_id*."""
    key_id = key_id.lower()

    if key_id.startswith("ctrl+"):
        ctrl = raw_ctrl_char(key_id[len("ctrl+"):])
        return ctrl is not None and data == ctrl

    special = _SPECIAL_KEYS.get(key_id)
    if special is not None:
        return data == special

    return data == key_id
