"""Small value types shared by the frame buffer: vectors, cell positions and formatted characters."""

from __future__ import annotations

from dataclasses import dataclass

UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF


@dataclass(frozen=True)
class Vec2:
    """A two-dimensional integer vector."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class CellPos:
    """A position of a cell on the frame buffer; both coordinates are unsigned 16-bit."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        for name in ("x", "y"):
            value = getattr(self, name)
            if not 0 <= value <= UINT16_MAX:
                raise ValueError(f"{name}={value} is outside 0..{UINT16_MAX}")


@dataclass
class FormattedChar:
    """A character with up to three ANSI SGR arguments.

    ``argc`` selects how the cell is rendered: 0 prints the bare character,
    1 to 3 wrap it in an SGR sequence with that many arguments, and 4 emits
    the raw sequence ``ESC [ arg1 ; chr(arg2)`` without any character.
    Any other ``argc`` renders nothing.
    """

    argc: int = 0
    arg1: int = 0
    arg2: int = 0
    arg3: int = 0
    char: str = " "

    def __post_init__(self) -> None:
        for name in ("argc", "arg1", "arg2", "arg3"):
            value = getattr(self, name)
            if not 0 <= value <= UINT8_MAX:
                raise ValueError(f"{name}={value} is outside 0..{UINT8_MAX}")
        if len(self.char) != 1:
            raise ValueError(f"char must be a single character, got {self.char!r}")

    def render(self) -> str:
        """Return the text that draws this cell on an ANSI terminal."""
        if self.argc == 0:
            return self.char
        if self.argc == 1:
            return f"\033[{self.arg1}m{self.char}\033[0m"
        if self.argc == 2:
            return f"\033[{self.arg1};{self.arg2}m{self.char}\033[0m"
        if self.argc == 3:
            return f"\033[{self.arg1};{self.arg2};{self.arg3}m{self.char}\033[0m"
        if self.argc == 4:
            return f"\033[{self.arg1};{chr(self.arg2)}"
        return ""