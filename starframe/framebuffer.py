"""A character frame buffer that renders to an ANSI terminal."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, TextIO

from .cells import UINT8_MAX, FormattedChar
from .dynarray import DynArray

_RESIZE_FAILED_MESSAGE = (
    "\n\n\nTERMINAL REIZE FAILED\n" "\n\n\nPress enter to retry resize\n"
)


def _blank_cell() -> FormattedChar:
    return FormattedChar(char="\0")


def clear_terminal_sequence() -> str:
    """Return the sequence that homes the cursor and clears the screen."""
    return "\033[H\033[J"


def goto_sequence(x: int, y: int) -> str:
    """Return the sequence that moves the cursor to column ``x``, row ``y``."""
    return f"\033[{y};{x}H"


def resize_sequence(x: int, y: int) -> str:
    """Return the sequence that asks the terminal to become ``x`` by ``y``."""
    return f"\033[8;{y};{x}t"


def clear_area_text(x: int, y: int, width: int, height: int) -> str:
    """Return text that blanks a ``width`` by ``height`` area starting at ``x``, ``y``."""
    return goto_sequence(x, y) + (" " * width + "\n") * height


class FrameBuffer:
    """A ``width`` by ``height`` grid of formatted characters, stored row by row."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = 0
        self.height = 0
        self._cells: DynArray[FormattedChar] = DynArray(_blank_cell)
        self.set_size(width, height)

    @property
    def area(self) -> int:
        """Number of cells in the buffer."""
        return self.width * self.height

    def set_size(self, width: int, height: int) -> FrameBuffer:
        """Resize the buffer; every cell becomes a blank NUL cell."""
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        cells: DynArray[FormattedChar] = DynArray(_blank_cell)
        cells.extend_by(width * height)
        for _ in range(width * height):
            cells.append(_blank_cell())
        self._cells = cells
        self.width = width
        self.height = height
        return self

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"index out of bounds x={x} y={y}")
        return y * self.width + x

    def clear(self) -> None:
        """Make every cell an unformatted space."""
        for index in range(self.area):
            self._cells.set(index, FormattedChar(char=" "))

    def fill_with_empty(self) -> None:
        """Make every cell a transparent cell that draws no character."""
        for index in range(self.area):
            self._cells.set(
                index, FormattedChar(argc=4, arg1=1, arg2=ord("C"), arg3=0, char="\0")
            )

    def cell(self, x: int, y: int) -> FormattedChar:
        """Return the cell at ``x``, ``y``; changes to it change the buffer."""
        return self._cells.get(self._index(x, y))

    def put(self, x: int, y: int, cell: FormattedChar) -> None:
        """Store a copy of ``cell`` at ``x``, ``y``."""
        self._cells.set(self._index(x, y), replace(cell))

    def set_char(self, x: int, y: int, char: str) -> None:
        """Set the character at ``x``, ``y`` and drop its formatting."""
        target = self.cell(x, y)
        if len(char) != 1:
            raise ValueError(f"char must be a single character, got {char!r}")
        target.argc = 0
        target.char = char

    def set_formatted(self, x: int, y: int, char: str, *args: int) -> None:
        """Set the character at ``x``, ``y`` with up to three SGR arguments."""
        if len(args) > 3:
            raise ValueError(f"at most 3 format arguments, got {len(args)}")
        target = self.cell(x, y)
        if len(char) != 1:
            raise ValueError(f"char must be a single character, got {char!r}")
        target.char = char
        if args:
            target.argc = len(args)
            for name, value in zip(("arg1", "arg2", "arg3"), args):
                setattr(target, name, value & UINT8_MAX)

    def copy(self) -> FrameBuffer:
        """Return an independent buffer with the same size and cells."""
        clone = FrameBuffer(self.width, self.height)
        clone.copy_cells_from(self)
        return clone

    def copy_cells_from(self, other: FrameBuffer) -> None:
        """Copy every cell of ``other``, which must have the same size."""
        if (other.width, other.height) != (self.width, self.height):
            raise ValueError(
                f"size mismatch: {other.width}x{other.height} "
                f"into {self.width}x{self.height}"
            )
        for index, cell in enumerate(other):
            self._cells.set(index, replace(cell))

    def __iter__(self) -> Iterator[FormattedChar]:
        return iter(self._cells)

    def rows(self) -> Iterator[list[FormattedChar]]:
        """Yield the cells one row at a time."""
        cells = list(self._cells)
        for y in range(self.height):
            yield cells[y * self.width : (y + 1) * self.width]

    def render(self) -> str:
        """Return the text that draws the whole buffer and homes the cursor."""
        lines = ("".join(cell.render() for cell in row) for row in self.rows())
        return "\n".join(lines) + goto_sequence(0, 0)

    def print(self, out: TextIO | None = None) -> None:
        """Draw the buffer on ``out``, first making sure a terminal is big enough."""
        out = sys.stdout if out is None else out
        if out.isatty():
            while not terminal_fits(self, out):
                out.write(clear_terminal_sequence() + _RESIZE_FAILED_MESSAGE)
                out.flush()
                sys.stdin.readline()
        out.write(self.render())
        out.flush()


def terminal_fits(buffer: FrameBuffer, out: TextIO) -> bool:
    """Ask the terminal behind ``out`` to match the buffer; report whether it fits.

    Output that is not a terminal places no limit and always fits.
    """
    try:
        fd = out.fileno()
        size = os.get_terminal_size(fd)
    except (AttributeError, OSError, ValueError):
        return True
    if (size.columns, size.lines) != (buffer.width, buffer.height):
        out.write(resize_sequence(buffer.width, buffer.height))
        out.flush()
        size = os.get_terminal_size(fd)
    return size.columns >= buffer.width and size.lines >= buffer.height


@contextmanager
def unbuffered_terminal(fd: int | None = None) -> Iterator[list]:
    """Turn off line buffering and echo on ``fd`` for the duration of the block."""
    import termios

    if fd is None:
        fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    changed = list(saved)
    changed[3] = saved[3] & ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSANOW, changed)
    try:
        yield saved
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, saved)