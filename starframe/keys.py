"""Reading single key presses, including common escape sequences."""

from __future__ import annotations

from enum import IntEnum
from typing import TextIO


class Key(IntEnum):
    """Codes for keys that are not plain printable characters."""

    CTRL_D = 4
    DEL = 8
    RET = 10
    CTRL_U = 21
    ESC = 27
    BACKSPACE = 127

    UP = 128
    LEFT = 129
    RIGHT = 130
    DOWN = 131

    UP_SHIFT = 132
    LEFT_SHIFT = 133
    RIGHT_SHIFT = 134
    DOWN_SHIFT = 135

    NE = 136
    SE = 137
    NW = 138
    SW = 139

    NE_SHIFT = 140
    SE_SHIFT = 141
    NW_SHIFT = 142
    SW_SHIFT = 143

    F1 = 144
    F2 = 145
    F3 = 146
    F4 = 147


_CONTROL_KEYS = {
    "\x04": Key.CTRL_D,
    "\x08": Key.DEL,
    "\n": Key.RET,
    "\x15": Key.CTRL_U,
    "\x7f": Key.BACKSPACE,
}

_CSI_KEYS = {
    "A": Key.UP,
    "a": Key.UP_SHIFT,
    "B": Key.DOWN,
    "b": Key.DOWN_SHIFT,
    "C": Key.RIGHT,
    "c": Key.RIGHT_SHIFT,
    "D": Key.LEFT,
    "d": Key.LEFT_SHIFT,
}

_CSI_TILDE_KEYS = {"5": Key.NE, "6": Key.SE, "7": Key.NW, "8": Key.SW}

_FUNCTION_KEYS = {"1": Key.F1, "2": Key.F2, "3": Key.F3, "4": Key.F4}

_SS3_KEYS = {
    "y": Key.NE_SHIFT,
    "s": Key.SE_SHIFT,
    "w": Key.NW_SHIFT,
    "q": Key.SW_SHIFT,
}


def is_std_char(char: str) -> bool:
    """Return whether ``char`` is a printable ASCII character."""
    return len(char) == 1 and 31 < ord(char) < 127


def _read_escape(stream: TextIO) -> Key | None:
    follow = stream.read(1)
    if follow == "\033":
        return Key.ESC
    if follow == "[":
        code = stream.read(1)
        if code in _CSI_KEYS:
            return _CSI_KEYS[code]
        if code in _CSI_TILDE_KEYS:
            return _CSI_TILDE_KEYS[code] if stream.read(1) == "~" else None
        if code == "1":
            number = stream.read(1)
            if number in _FUNCTION_KEYS:
                return _FUNCTION_KEYS[number] if stream.read(1) == "~" else None
        return None
    if follow == "O":
        return _SS3_KEYS.get(stream.read(1))
    return None


def read_key(stream: TextIO) -> tuple[str, Key | None]:
    """Read one key press from ``stream``.

    Returns the first character read and the special key it starts, if any.
    Printable characters come back with ``None``; at end of input the
    character is the empty string.
    """
    first = stream.read(1)
    if not first:
        return "", None
    if is_std_char(first):
        return first, None
    if first == "\033":
        return first, _read_escape(stream)
    return first, _CONTROL_KEYS.get(first)