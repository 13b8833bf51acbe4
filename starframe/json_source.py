"""Byte sources for the streaming JSON reader, and the token types it reports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from enum import IntEnum
from typing import BinaryIO, Callable, Optional, TextIO, Union


class JsonType(IntEnum):
    """The kinds of event a JSON stream produces."""

    ERROR = 1
    DONE = 2
    OBJECT = 3
    OBJECT_END = 4
    ARRAY = 5
    ARRAY_END = 6
    STRING = 7
    NUMBER = 8
    TRUE = 9
    FALSE = 10
    NULL = 11


class JsonParseError(Exception):
    """Raised when the JSON text is malformed; carries the line it was found on."""

    def __init__(self, message: str, lineno: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f"{self.lineno}: {self.message}"


def is_space(c: Optional[int]) -> bool:
    """Return whether byte ``c`` is JSON whitespace (tab, newline, return or space)."""
    return c in (0x09, 0x0A, 0x0D, 0x20)


class Source(ABC):
    """A source of bytes read one at a time; ``None`` marks the end.

    ``position`` counts the bytes taken with :meth:`get`.
    """

    def __init__(self) -> None:
        self.position = 0

    @abstractmethod
    def get(self) -> Optional[int]:
        """Take the next byte, or return ``None`` at the end."""

    @abstractmethod
    def peek(self) -> Optional[int]:
        """Return the next byte without taking it, or ``None`` at the end."""


class BufferSource(Source):
    """Bytes held in memory; text is encoded as UTF-8."""

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]) -> None:
        super().__init__()
        self._data = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    def peek(self) -> Optional[int]:
        if self.position < len(self._data):
            return self._data[self.position]
        return None

    def get(self) -> Optional[int]:
        byte = self.peek()
        self.position += 1
        return byte


class StreamSource(Source):
    """Bytes read from a file object; text streams are encoded as UTF-8."""

    def __init__(self, stream: Union[BinaryIO, TextIO]) -> None:
        super().__init__()
        self._stream = stream
        self._pending: deque[int] = deque()

    def _fill(self) -> bool:
        if self._pending:
            return True
        chunk = self._stream.read(1)
        if not chunk:
            return False
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._pending.extend(chunk)
        return True

    def get(self) -> Optional[int]:
        self.position += 1
        if not self._fill():
            return None
        return self._pending.popleft()

    def peek(self) -> Optional[int]:
        if not self._fill():
            return None
        return self._pending[0]


class CallableSource(Source):
    """Bytes supplied by two functions of the caller's choosing.

    ``position`` is left to the caller; it is not advanced.
    """

    def __init__(
        self,
        get: Callable[[], Optional[int]],
        peek: Callable[[], Optional[int]],
    ) -> None:
        super().__init__()
        self._get = get
        self._peek = peek

    def get(self) -> Optional[int]:
        return self._get()

    def peek(self) -> Optional[int]:
        return self._peek()