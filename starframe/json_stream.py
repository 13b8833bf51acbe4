"""A pull parser that reports JSON text as a stream of events."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, TextIO, Union

from .json_source import (
    BufferSource,
    JsonParseError,
    JsonType,
    Source,
    StreamSource,
    is_space,
)

_ESCAPES = {
    ord("\\"): 0x5C,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("/"): 0x2F,
    ord('"'): 0x22,
}

_SECOND_BYTE_RANGES = {
    0xE0: (0xA0, 0xBF),
    0xED: (0x80, 0x9F),
    0xF0: (0x90, 0xBF),
    0xF4: (0x80, 0x8F),
}

_NUMBER_PREFIX = re.compile(rb"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_HEX_DIGITS = b"0123456789abcdefABCDEF"


def _show(c: Optional[int]) -> str:
    return "EOF" if c is None else chr(c)


def _is_digit(c: Optional[int]) -> bool:
    return c is not None and 0x30 <= c <= 0x39


def _utf8_seq_length(byte: int) -> int:
    if byte < 0x80:
        return 1
    if 0xC2 <= byte <= 0xDF:
        return 2
    if 0xE0 <= byte <= 0xEF:
        return 3
    if 0xF0 <= byte <= 0xF4:
        return 4
    return 0


def _is_legal_utf8(seq: list[int]) -> bool:
    if not 1 <= len(seq) <= 4:
        return False
    first = seq[0]
    if any(not 0x80 <= a <= 0xBF for a in seq[2:]):
        return False
    if len(seq) >= 2:
        low, high = _SECOND_BYTE_RANGES.get(first, (0x80, 0xBF))
        if not low <= seq[1] <= high:
            return False
    if 0x80 <= first < 0xC2:
        return False
    return first <= 0xF4


@dataclass
class _Frame:
    kind: JsonType
    count: int = 0


class JsonStream:
    """Reads JSON from a :class:`Source` one event at a time.

    In streaming mode several top-level values may follow one another; each
    one ends with :attr:`JsonType.DONE` and :meth:`reset` starts the next.
    Otherwise anything but whitespace after the single value is an error.
    Malformed text raises :class:`JsonParseError`; the error sticks until
    :meth:`reset`.
    """

    def __init__(self, source: Source, streaming: bool = True) -> None:
        self.source = source
        self.streaming = streaming
        self.lineno = 1
        self._stack: list[_Frame] = []
        self._next: Optional[JsonType] = None
        self._data = bytearray()
        self._ntokens = 0
        self._error: Optional[str] = None

    @classmethod
    def from_bytes(
        cls, data: Union[bytes, bytearray, memoryview, str], streaming: bool = True
    ) -> JsonStream:
        """Parse JSON held in memory."""
        return cls(BufferSource(data), streaming)

    @classmethod
    def from_string(cls, text: str, streaming: bool = True) -> JsonStream:
        """Parse JSON text, encoded as UTF-8."""
        return cls(BufferSource(text), streaming)

    @classmethod
    def from_file(
        cls, stream: Union[BinaryIO, TextIO], streaming: bool = True
    ) -> JsonStream:
        """Parse JSON read from a file object."""
        return cls(StreamSource(stream), streaming)

    @property
    def error(self) -> Optional[str]:
        """The message of the pending error, or ``None``."""
        return self._error

    @property
    def position(self) -> int:
        """Number of bytes taken from the source."""
        return self.source.position

    @property
    def depth(self) -> int:
        """Number of arrays and objects currently open."""
        return len(self._stack)

    def _fail(self, message: str) -> JsonParseError:
        if self._error is None:
            self._error = message
        return JsonParseError(self._error, self.lineno)

    # -- low-level reading -------------------------------------------------

    def _next_nonspace(self) -> Optional[int]:
        while True:
            c = self.source.get()
            if not is_space(c):
                return c
            if c == 0x0A:
                self.lineno += 1

    def _is_match(self, pattern: bytes, kind: JsonType) -> JsonType:
        for expected in pattern:
            c = self.source.get()
            if c != expected:
                raise self._fail(
                    f"expected '{chr(expected)}' instead of byte '{_show(c)}'"
                )
        return kind

    def _read_unicode_cp(self) -> int:
        cp = 0
        for _ in range(4):
            c = self.source.get()
            if c is None:
                raise self._fail("unterminated string literal in Unicode")
            if c not in _HEX_DIGITS:
                raise self._fail(f"invalid escape Unicode byte '{_show(c)}'")
            cp = cp * 16 + int(chr(c), 16)
        return cp

    def _encode_utf8(self, cp: int) -> None:
        if 0xD800 <= cp <= 0xDFFF:
            raise self._fail(f"invalid codepoint {cp:06x}")
        if cp >= 0x110000:
            raise self._fail(f"unable to encode {cp:06x} as UTF-8")
        self._data.extend(chr(cp).encode("utf-8"))

    def _expect_continuation(self, expected: str) -> None:
        c = self.source.get()
        if c is None:
            raise self._fail("unterminated string literal in Unicode")
        if c != ord(expected):
            raise self._fail(
                f"invalid continuation for surrogate pair '{_show(c)}', "
                f"expected '{expected}'"
            )

    def _read_unicode(self) -> None:
        cp = self._read_unicode_cp()
        if 0xD800 <= cp <= 0xDBFF:
            self._expect_continuation("\\")
            self._expect_continuation("u")
            low = self._read_unicode_cp()
            if not 0xDC00 <= low <= 0xDFFF:
                raise self._fail(
                    f"surrogate pair continuation \\u{low:04x} out "
                    "of range (dc00-dfff)"
                )
            cp = (cp - 0xD800) * 0x400 + (low - 0xDC00) + 0x10000
        elif 0xDC00 <= cp <= 0xDFFF:
            raise self._fail(f"dangling surrogate \\u{cp:04x}")
        self._encode_utf8(cp)

    def _read_escaped(self) -> None:
        c = self.source.get()
        if c is None:
            raise self._fail("unterminated string literal in escape")
        if c == ord("u"):
            self._read_unicode()
        elif c in _ESCAPES:
            self._data.append(_ESCAPES[c])
        else:
            raise self._fail(f"invalid escaped byte '{_show(c)}'")

    def _read_utf8(self, first: int) -> None:
        count = _utf8_seq_length(first)
        if not count:
            raise self._fail("invalid UTF-8 character")
        seq = [first]
        for _ in range(count - 1):
            c = self.source.get()
            seq.append(0xFF if c is None else c)
        if not _is_legal_utf8(seq):
            raise self._fail("invalid UTF-8 text")
        self._data.extend(seq)

    def _read_string(self) -> JsonType:
        self._data.clear()
        while True:
            c = self.source.get()
            if c is None:
                raise self._fail("unterminated string literal")
            if c == 0x22:
                return JsonType.STRING
            if c == 0x5C:
                self._read_escaped()
            elif c >= 0x80:
                self._read_utf8(c)
            elif c < 0x20:
                raise self._fail("unescaped control character in string")
            else:
                self._data.append(c)

    def _read_digits(self) -> None:
        nread = 0
        while _is_digit(c := self.source.peek()):
            self._data.append(self.source.get())
            nread += 1
        if nread == 0:
            raise self._fail(f"expected digit instead of byte '{_show(c)}'")

    def _read_number(self, c: int) -> JsonType:
        self._data.append(c)
        if c == ord("-"):
            c = self.source.get()
            if _is_digit(c):
                return self._read_number(c)
            raise self._fail(f"unexpected byte '{_show(c)}' in number")
        if c in b"123456789" and _is_digit(self.source.peek()):
            self._read_digits()
        c = self.source.peek()
        if c is None or c not in b".eE\0":
            return JsonType.NUMBER
        if c == ord("."):
            self.source.get()
            self._data.append(c)
            self._read_digits()
        c = self.source.peek()
        if c in (ord("e"), ord("E")):
            self.source.get()
            self._data.append(c)
            c = self.source.peek()
            if c in (ord("+"), ord("-")):
                self.source.get()
                self._data.append(c)
                self._read_digits()
            elif _is_digit(c):
                self._read_digits()
            else:
                raise self._fail(f"unexpected byte '{_show(c)}' in number")
        return JsonType.NUMBER

    def _read_value(self, c: Optional[int]) -> JsonType:
        self._ntokens += 1
        if c is None:
            raise self._fail("unexpected end of text")
        if c == ord("{"):
            self._stack.append(_Frame(JsonType.OBJECT))
            return JsonType.OBJECT
        if c == ord("["):
            self._stack.append(_Frame(JsonType.ARRAY))
            return JsonType.ARRAY
        if c == ord('"'):
            return self._read_string()
        if c == ord("n"):
            return self._is_match(b"ull", JsonType.NULL)
        if c == ord("f"):
            return self._is_match(b"alse", JsonType.FALSE)
        if c == ord("t"):
            return self._is_match(b"rue", JsonType.TRUE)
        if _is_digit(c) or c == ord("-"):
            self._data.clear()
            return self._read_number(c)
        raise self._fail(f"unexpected byte '{_show(c)}' in value")

    def _pop(self, c: int, expected: JsonType) -> JsonType:
        if not self._stack or self._stack[-1].kind is not expected:
            raise self._fail(f"unexpected byte '{_show(c)}'")
        self._stack.pop()
        return JsonType.ARRAY_END if expected is JsonType.ARRAY else JsonType.OBJECT_END

    def _member_name(self, c: Optional[int], message: str) -> JsonType:
        value = self._read_value(c)
        if value is not JsonType.STRING:
            raise self._fail(message)
        self._stack[-1].count += 1
        return value

    # -- public interface --------------------------------------------------

    def next(self) -> JsonType:
        """Return the next event, or :attr:`JsonType.DONE` at the end of a value."""
        if self._error is not None:
            raise JsonParseError(self._error, self.lineno)
        if self._next is not None:
            pending, self._next = self._next, None
            return pending
        if self._ntokens > 0 and not self._stack:
            if not self.streaming:
                c = self.source.peek()
                while is_space(c):
                    self.source.get()
                    c = self.source.peek()
                if c is not None:
                    raise self._fail(
                        f"expected end of text instead of byte '{_show(c)}'"
                    )
            return JsonType.DONE

        c = self._next_nonspace()
        if not self._stack:
            if c is None and self.streaming:
                return JsonType.DONE
            return self._read_value(c)

        frame = self._stack[-1]
        if frame.kind is JsonType.ARRAY:
            if frame.count == 0:
                if c == ord("]"):
                    return self._pop(c, JsonType.ARRAY)
                frame.count += 1
                return self._read_value(c)
            if c == ord(","):
                frame.count += 1
                return self._read_value(self._next_nonspace())
            if c == ord("]"):
                return self._pop(c, JsonType.ARRAY)
            raise self._fail(f"unexpected byte '{_show(c)}'")

        if frame.count == 0:
            if c == ord("}"):
                return self._pop(c, JsonType.OBJECT)
            return self._member_name(c, "expected member name or '}'")
        if frame.count % 2 == 0:
            if c == ord("}"):
                return self._pop(c, JsonType.OBJECT)
            if c != ord(","):
                raise self._fail("expected ',' or '}' after member value")
            return self._member_name(self._next_nonspace(), "expected member name")
        if c != ord(":"):
            raise self._fail("expected ':' after member name")
        frame.count += 1
        return self._read_value(self._next_nonspace())

    def peek(self) -> JsonType:
        """Return the next event without consuming it."""
        if self._next is None:
            self._next = self.next()
        return self._next

    def reset(self) -> None:
        """Forget open containers and any error, ready for the next value."""
        self._stack.clear()
        self._ntokens = 0
        self._error = None

    def skip(self) -> JsonType:
        """Consume the next value whole, returning its first event."""
        kind = self.next()
        arrays = objects = 0
        current = kind
        while True:
            if current is JsonType.DONE:
                return current
            if current is JsonType.ARRAY:
                arrays += 1
            elif current is JsonType.ARRAY_END and arrays > 0:
                arrays -= 1
            elif current is JsonType.OBJECT:
                objects += 1
            elif current is JsonType.OBJECT_END and objects > 0:
                objects -= 1
            if not arrays and not objects:
                return kind
            current = self.next()

    def skip_until(self, kind: JsonType) -> JsonType:
        """Skip values until one starting with ``kind``; stop early at DONE."""
        while True:
            skipped = self.skip()
            if skipped is JsonType.DONE:
                return skipped
            if skipped is kind:
                return kind

    def string(self) -> str:
        """The text of the last string or number read."""
        return self._data.decode("utf-8", errors="replace")

    def number(self) -> float:
        """The last number read, as a float; 0.0 when there is none."""
        match = _NUMBER_PREFIX.match(bytes(self._data))
        return float(match.group(0)) if match else 0.0

    def context(self) -> tuple[JsonType, int]:
        """The innermost open container and the events seen in it.

        Outside any container this is ``(JsonType.DONE, 0)``.
        """
        if not self._stack:
            return JsonType.DONE, 0
        frame = self._stack[-1]
        return frame.kind, frame.count

    def source_get(self) -> Optional[int]:
        """Take one byte straight from the source, counting newlines."""
        c = self.source.get()
        if c == 0x0A:
            self.lineno += 1
        return c

    def source_peek(self) -> Optional[int]:
        """Look at the next byte of the source without taking it."""
        return self.source.peek()

    def __iter__(self) -> Iterator[JsonType]:
        """Yield the events of the current value, up to but not including DONE."""
        while True:
            kind = self.next()
            if kind is JsonType.DONE:
                return
            yield kind