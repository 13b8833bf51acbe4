"""Drawing primitives for a frame buffer: strings, rectangles, windows and lines."""

from __future__ import annotations

from contextlib import suppress
from dataclasses import replace
from enum import IntEnum
from typing import Iterable, Protocol

from .cells import CellPos, FormattedChar
from .framebuffer import FrameBuffer

FRAME_CHARS = "─│┌┐└┘├┤┬┴┼"
FRAME_CHARS_DOUBLE = "═║╔╗╚╝╠╣╦╩╬"

FRAME_H = 0
FRAME_V = 1
FRAME_TL = 2
FRAME_TR = 3
FRAME_BL = 4
FRAME_BR = 5
FRAME_HL = 6
FRAME_HR = 7
FRAME_VT = 8
FRAME_VB = 9
FRAME_X = 10


class DrawError(Exception):
    """Raised when a drawing operation cannot be carried out."""


class StringMode(IntEnum):
    """How a string is laid out on the buffer."""

    VERT = 1  # characters run along the row, one column per character
    HOR = 2  # characters run down the column, one row per character
    VERTF = 11  # folding variants: accepted by the bounds check, not drawable
    HORF = 22


class Fill(IntEnum):
    """Predefined cells used to fill rectangles."""

    TRANSPARENT = 100
    SPACE = 101


class _Point(Protocol):
    x: int
    y: int


def _check_rect(buffer: FrameBuffer, x: int, y: int, width: int, height: int) -> None:
    if (
        x < 0
        or y < 0
        or width < 0
        or height < 0
        or x >= buffer.width
        or x + width > buffer.width
        or y >= buffer.height
        or y + height > buffer.height
    ):
        raise DrawError(f"rectangle out of bounds: {x} {y} {width} {height}")


def emplace_string(
    buffer: FrameBuffer, x: int, y: int, text: str, mode: StringMode | int
) -> None:
    """Write ``text`` without formatting, starting at ``x``, ``y``."""
    try:
        mode = StringMode(mode)
    except ValueError:
        raise DrawError(f"unknown string mode {mode}") from None
    length = len(text)
    if x < 0 or y < 0:
        raise DrawError(f"position out of bounds x={x} y={y}")
    if mode is StringMode.VERT:
        if x + length > buffer.width or (length and y >= buffer.height):
            raise DrawError("string does not fit on the row")
        for offset, char in enumerate(text):
            buffer.set_char(x + offset, y, char)
    elif mode is StringMode.HOR:
        if y + length > buffer.height or (length and x >= buffer.width):
            raise DrawError("string does not fit in the column")
        for offset, char in enumerate(text):
            buffer.set_char(x, y + offset, char)
    else:
        start = x if mode is StringMode.VERTF else y
        if start + length > buffer.area:
            raise DrawError("string does not fit in the buffer")
        raise DrawError(f"string mode {mode.name} is not supported")


def fill_rectangle(
    buffer: FrameBuffer, x: int, y: int, width: int, height: int, cell: FormattedChar
) -> None:
    """Put a copy of ``cell`` in every position of the rectangle."""
    _check_rect(buffer, x, y, width, height)
    for row in range(y, y + height):
        for column in range(x, x + width):
            buffer.put(column, row, cell)


def _fill_cell(fill: Fill | int) -> FormattedChar:
    try:
        fill = Fill(fill)
    except ValueError:
        raise DrawError(f"unknown fill {fill}") from None
    if fill is Fill.TRANSPARENT:
        return FormattedChar(argc=4, arg1=1, arg2=ord("C"), arg3=0, char="\0")
    return FormattedChar(char=" ")


def fill_rectangle_with(
    buffer: FrameBuffer, x: int, y: int, width: int, height: int, fill: Fill | int
) -> None:
    """Fill the rectangle with one of the predefined cells."""
    fill_rectangle(buffer, x, y, width, height, _fill_cell(fill))


def format_rectangle(
    buffer: FrameBuffer, x: int, y: int, width: int, height: int, cell: FormattedChar
) -> None:
    """Give every cell of the rectangle the formatting of ``cell``, keeping its character."""
    _check_rect(buffer, x, y, width, height)
    for row in range(y, y + height):
        for column in range(x, x + width):
            target = buffer.cell(column, row)
            target.argc = cell.argc
            target.arg1 = cell.arg1
            target.arg2 = cell.arg2
            target.arg3 = cell.arg3


def _put_char(buffer: FrameBuffer, x: int, y: int, char: str) -> None:
    with suppress(IndexError):
        buffer.set_char(x, y, char)


def draw_window(buffer: FrameBuffer, x: int, y: int, width: int, height: int) -> None:
    """Draw a double-lined window whose corners are ``x``, ``y`` and ``x+width``, ``y+height``.

    The window and a margin around it are cleared to spaces first. Parts of
    the frame that fall on the last column or row past the buffer are dropped.
    """
    if width < 3 or height < 3:
        raise DrawError("window too small")
    _check_rect(buffer, x, y, width, height)

    left = 1 if x > 0 else 0
    top = 1 if y > 0 else 0
    right = 2 if x > 0 else 0
    bottom = 2 if y > 0 else 0
    if x + width + 1 < buffer.width:
        right += 2
    if y + height + 1 < buffer.height:
        bottom += 2
    if x > 0 and x + width + 1 < buffer.width:
        right = 3
    if y > 0 and y + height + 1 < buffer.height:
        bottom = 3

    with suppress(DrawError):
        fill_rectangle_with(
            buffer, x - left, y - top, width + right, height + bottom, Fill.SPACE
        )

    horizontal = FormattedChar(char=FRAME_CHARS_DOUBLE[FRAME_H])
    vertical = FormattedChar(char=FRAME_CHARS_DOUBLE[FRAME_V])
    for args, cell in (
        ((x + 1, y, width - 1, 1), horizontal),
        ((x + 1, y + height, width - 1, 1), horizontal),
        ((x, y + 1, 1, height - 1), vertical),
        ((x + width, y + 1, 1, height - 1), vertical),
    ):
        with suppress(DrawError):
            fill_rectangle(buffer, *args, cell)

    _put_char(buffer, x, y, "X")
    _put_char(buffer, x, y + height, FRAME_CHARS_DOUBLE[FRAME_BL])
    _put_char(buffer, x + width, y + height, FRAME_CHARS_DOUBLE[FRAME_BR])
    _put_char(buffer, x + width, y, FRAME_CHARS_DOUBLE[FRAME_TR])


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def line_points(src: _Point, dest: _Point) -> list[CellPos]:
    """Return the cells of a straight line from ``src`` to ``dest`` (Bresenham)."""
    x, y = src.x, src.y
    w = dest.x - x
    h = dest.y - y
    dx1 = dx2 = _sign(w)
    dy1 = _sign(h)
    dy2 = 0
    longest, shortest = abs(w), abs(h)
    if not longest > shortest:
        longest, shortest = abs(h), abs(w)
        dy2 = _sign(h)
        dx2 = 0
    numerator = longest >> 1
    points: list[CellPos] = []
    for _ in range(longest + 1):
        points.append(CellPos(x, y))
        numerator += shortest
        if not numerator < longest:
            numerator -= longest
            x += dx1
            y += dy1
        else:
            x += dx2
            y += dy2
    return points


def draw_points(
    buffer: FrameBuffer, points: Iterable[_Point], cell: FormattedChar
) -> None:
    """Put a copy of ``cell`` at every point that lies on the buffer; skip the rest."""
    for point in points:
        if 0 <= point.x < buffer.width and 0 <= point.y < buffer.height:
            buffer.put(point.x, point.y, cell)


def draw_line(
    buffer: FrameBuffer, src: _Point, dest: _Point, cell: FormattedChar
) -> None:
    """Draw a straight line of ``cell`` from ``src`` to ``dest``."""
    draw_points(buffer, line_points(src, dest), replace(cell))