"""Simple interactive prompts: number input and a yes/no window."""

from __future__ import annotations

import sys
from contextlib import nullcontext, suppress
from typing import TextIO

from .cells import FormattedChar
from .draw import DrawError, StringMode, draw_window, emplace_string, format_rectangle
from .framebuffer import FrameBuffer, unbuffered_terminal
from .keys import Key, read_key

_ULONG_MAX = 2**64 - 1
_WHITESPACE = " \t\n\v\f\r"


class _CharReader:
    """Reads one character at a time with a single character of push-back."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: str | None = None
        self._pending_pos: int | None = None
        self._last_pos: int | None = None
        try:
            self._seekable = stream.seekable()
        except (AttributeError, OSError, ValueError):
            self._seekable = False

    def read(self) -> str:
        if self._pending is not None:
            char, self._pending = self._pending, None
            self._last_pos = self._pending_pos
            return char
        self._last_pos = self._stream.tell() if self._seekable else None
        return self._stream.read(1)

    def unread(self, char: str) -> None:
        if char:
            self._pending = char
            self._pending_pos = self._last_pos

    def release(self) -> None:
        """Return a pushed-back character to the stream where possible."""
        if self._pending is not None and self._pending_pos is not None:
            self._stream.seek(self._pending_pos)
        self._pending = None


def _scan_uint16(reader: _CharReader) -> int | None:
    char = reader.read()
    while char and char in _WHITESPACE:
        char = reader.read()
    if not char:
        raise EOFError("end of input while reading a number")
    negative = False
    if char in "+-":
        negative = char == "-"
        char = reader.read()
    digits = []
    while char and char in "0123456789":
        digits.append(char)
        char = reader.read()
    reader.unread(char)
    if not digits:
        return None
    value = min(int("".join(digits)), _ULONG_MAX)
    if negative:
        value = -value % (_ULONG_MAX + 1)
    return value & 0xFFFF


def _read_int(reader: _CharReader, prompt: str, outfile: TextIO) -> int:
    while True:
        outfile.write(prompt)
        outfile.flush()
        value = _scan_uint16(reader)
        if value is not None:
            return value
        sys.stderr.write("INPUT ERROR\n")
        reader.read()


def input_int(
    prompt: str, infile: TextIO | None = None, outfile: TextIO | None = None
) -> int:
    """Prompt until an unsigned 16-bit number is read; bad characters are skipped one by one."""
    reader = _CharReader(sys.stdin if infile is None else infile)
    try:
        return _read_int(reader, prompt, sys.stdout if outfile is None else outfile)
    finally:
        reader.release()


def input_int_range(
    prompt: str,
    maximum: int,
    infile: TextIO | None = None,
    outfile: TextIO | None = None,
) -> int:
    """Prompt until a number below ``maximum`` is read."""
    reader = _CharReader(sys.stdin if infile is None else infile)
    out = sys.stdout if outfile is None else outfile
    try:
        while True:
            value = _read_int(reader, prompt, out)
            if value < maximum:
                return value
    finally:
        reader.release()


def confirm_window(
    buffer: FrameBuffer,
    message: str,
    max_length: int,
    infile: TextIO | None = None,
    outfile: TextIO | None = None,
) -> bool:
    """Show ``message`` in a window over ``buffer`` and ask yes or no.

    ``y`` answers yes, ``n`` answers no, the left and right arrows move the
    selection and Enter accepts it; "no" is selected at first. The buffer is
    redrawn afterwards and left unchanged. Returns True for yes.
    """
    if max_length < 1:
        raise ValueError("max_length must be at least 1")
    if max_length + 4 > buffer.width:
        raise ValueError("max_length too long for the buffer width")
    infile = sys.stdin if infile is None else infile
    out = sys.stdout if outfile is None else outfile

    screen = buffer.copy()
    screen.fill_with_empty()

    x = screen.width // 2 - (max_length + 2)
    y = screen.height // 2 - 6
    with suppress(DrawError):
        draw_window(screen, x, y, max_length + 4, 7)
    with suppress(DrawError):
        emplace_string(screen, x + 2, y + 2, message[:max_length], StringMode.VERT)

    yes_x, no_x, choice_y = x + 2, x + 6, y + 5
    with suppress(DrawError):
        emplace_string(screen, yes_x, choice_y, "YES", StringMode.VERT)
    with suppress(DrawError):
        emplace_string(screen, no_x, choice_y, "no", StringMode.VERT)

    normal = FormattedChar(argc=2, arg1=0, arg2=37)
    inverse = FormattedChar(argc=2, arg1=7, arg2=37)

    try:
        is_tty = infile.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    terminal = unbuffered_terminal(infile.fileno()) if is_tty else nullcontext()

    answer_yes = False
    with terminal:
        while True:
            yes_cell, no_cell = (inverse, normal) if answer_yes else (normal, inverse)
            with suppress(DrawError):
                format_rectangle(screen, yes_x, choice_y, 2, 1, yes_cell)
            with suppress(DrawError):
                format_rectangle(screen, no_x, choice_y, 2, 1, no_cell)
            screen.print(out)

            char, special = read_key(infile)
            if not char:
                raise EOFError("end of input in confirmation window")
            if char == "y":
                answer_yes = True
                break
            if char == "n":
                answer_yes = False
                break
            if char == "\033":
                if special is Key.RIGHT:
                    answer_yes = False
                elif special is Key.LEFT:
                    answer_yes = True
            elif char == "\n":
                break

        screen.print(out)
        buffer.print(out)
    return answer_yes