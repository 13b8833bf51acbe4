"""Command-line helpers over the JSON event stream: pretty printing and token listings."""

from __future__ import annotations

import argparse
import sys
from typing import Iterator, Optional, TextIO

from .json_source import JsonParseError, JsonType
from .json_stream import JsonStream

_FIXED_VALUES = {
    JsonType.NULL: "null",
    JsonType.TRUE: "true",
    JsonType.FALSE: "false",
}


def _indent(out: TextIO, depth: int) -> None:
    out.write("  " * depth)


def _pretty_array(stream: JsonStream, out: TextIO) -> None:
    out.write("[\n")
    first = True
    while stream.peek() is not JsonType.ARRAY_END:
        if not first:
            out.write(",\n")
        first = False
        _indent(out, stream.depth)
        pretty(stream, out)
    stream.next()
    out.write("\n")
    _indent(out, stream.depth)
    out.write("]")


def _pretty_object(stream: JsonStream, out: TextIO) -> None:
    out.write("{\n")
    first = True
    while stream.peek() is not JsonType.OBJECT_END:
        if not first:
            out.write(",\n")
        first = False
        _indent(out, stream.depth)
        stream.next()
        out.write(f'"{stream.string()}": ')
        pretty(stream, out)
    stream.next()
    out.write("\n")
    _indent(out, stream.depth)
    out.write("}")


def pretty(stream: JsonStream, out: Optional[TextIO] = None) -> None:
    """Write the next value of ``stream`` to ``out``, indented two spaces per level.

    Strings are written as they were decoded, without escaping again.
    Malformed input raises :class:`JsonParseError`.
    """
    out = sys.stdout if out is None else out
    kind = stream.next()
    if kind in _FIXED_VALUES:
        out.write(_FIXED_VALUES[kind])
    elif kind is JsonType.NUMBER:
        out.write(stream.string())
    elif kind is JsonType.STRING:
        out.write(f'"{stream.string()}"')
    elif kind is JsonType.ARRAY:
        _pretty_array(stream, out)
    elif kind is JsonType.OBJECT:
        _pretty_object(stream, out)


def token_listing(stream: JsonStream) -> Iterator[tuple[JsonType, Optional[str]]]:
    """Yield every event of ``stream`` with its value, across consecutive values.

    Strings and numbers carry their text, literals their spelling, the rest
    ``None``. An error yields ``(JsonType.ERROR, None)`` and ends the listing;
    so does a DONE that follows another DONE directly.
    """
    first = True
    while True:
        try:
            kind = stream.next()
        except JsonParseError:
            yield JsonType.ERROR, None
            return
        if kind in (JsonType.NUMBER, JsonType.STRING):
            value: Optional[str] = stream.string()
        else:
            value = _FIXED_VALUES.get(kind)
        yield kind, value
        if kind is JsonType.DONE:
            if first:
                return
            stream.reset()
            first = True
        else:
            first = False


def _format_listing(stream: JsonStream) -> str:
    lines = ["struct expect seq[] = {"]
    for kind, value in token_listing(stream):
        if value is None:
            lines.append(f"    {{JSON_{kind.name}}},")
        else:
            lines.append(f'    {{JSON_{kind.name}, "{value}"}},')
    lines.append("};")
    return "\n".join(lines) + "\n"


def main(argv: Optional[list[str]] = None) -> int:
    """Pretty-print one JSON value, or list the events of a JSON stream."""
    parser = argparse.ArgumentParser(
        prog="starframe-json",
        description="Pretty-print JSON, or list its events with --tokens.",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="list the event stream of consecutive values instead",
    )
    parser.add_argument("file", nargs="?", help="file to read; standard input if omitted")
    args = parser.parse_args(argv)

    streaming = args.tokens
    if args.file is None:
        stream = JsonStream.from_file(sys.stdin.buffer, streaming=streaming)
    else:
        try:
            with open(args.file, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            sys.stderr.write(f"{exc.strerror or exc}\n")
            return 1
        stream = JsonStream.from_bytes(data, streaming=streaming)

    if args.tokens:
        sys.stdout.write(_format_listing(stream))
        return 0

    try:
        pretty(stream, sys.stdout)
    except JsonParseError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    sys.stdout.write("\n")
    return 0