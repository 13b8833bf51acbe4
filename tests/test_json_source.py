import io

import pytest

from starframe.json_source import (
    BufferSource,
    CallableSource,
    JsonParseError,
    StreamSource,
    is_space,
)


def drain(source):
    out = []
    while (byte := source.get()) is not None:
        out.append(byte)
    return bytes(out)


def test_parse_error_carries_line():
    err = JsonParseError("unexpected byte 'x'", 3)
    assert err.lineno == 3
    assert err.message == "unexpected byte 'x'"
    assert "unexpected byte 'x'" in str(err)


@pytest.mark.parametrize("c", [0x09, 0x0A, 0x0D, 0x20])
def test_is_space_true(c):
    assert is_space(c) is True


@pytest.mark.parametrize("c", [None, 0x0B, 0x0C, ord("a"), 0x00, 0xA0])
def test_is_space_false(c):
    assert is_space(c) is False


def test_buffer_source_peek_does_not_consume():
    src = BufferSource(b"ab")
    assert src.peek() == ord("a")
    assert src.peek() == ord("a")
    assert src.position == 0
    assert src.get() == ord("a")
    assert src.position == 1


def test_buffer_source_round_trip_and_end():
    data = b'{"k": [1, 2]}'
    src = BufferSource(data)
    assert drain(src) == data
    assert src.get() is None
    assert src.peek() is None


def test_buffer_source_position_counts_past_end():
    src = BufferSource(b"x")
    src.get()
    src.get()
    src.get()
    assert src.position == 3


def test_buffer_source_encodes_text_as_utf8():
    text = "caf\u00e9"
    assert drain(BufferSource(text)) == text.encode("utf-8")


def test_stream_source_binary_round_trip():
    data = b"[true, null]\n"
    src = StreamSource(io.BytesIO(data))
    assert drain(src) == data
    assert src.position == len(data) + 1


def test_stream_source_peek_then_get():
    src = StreamSource(io.BytesIO(b"12"))
    assert src.peek() == ord("1")
    assert src.get() == ord("1")
    assert src.peek() == ord("2")
    assert src.get() == ord("2")
    assert src.peek() is None


def test_stream_source_text_stream_yields_utf8_bytes():
    text = "\"\u00e9\u20ac\""
    src = StreamSource(io.StringIO(text))
    assert drain(src) == text.encode("utf-8")


def test_callable_source_delegates_and_keeps_position():
    data = list(b"ok")
    state = {"i": 0}

    def get():
        i = state["i"]
        state["i"] += 1
        return data[i] if i < len(data) else None

    def peek():
        i = state["i"]
        return data[i] if i < len(data) else None

    src = CallableSource(get, peek)
    assert src.peek() == ord("o")
    assert drain(src) == b"ok"
    assert src.peek() is None
    assert src.position == 0