import io

import pytest

from starframe.json_source import JsonParseError, JsonType, is_space
from starframe.json_stream import JsonStream

T = JsonType


def collect(data, streaming, length):
    """Run ``length`` steps and return (kind, value) pairs, stopping at an error."""
    js = JsonStream.from_bytes(data, streaming=streaming)
    events = []
    for _ in range(length):
        try:
            kind = js.next()
        except JsonParseError:
            events.append((T.ERROR, None))
            break
        value = js.string() if kind in (T.STRING, T.NUMBER) else None
        events.append((kind, value))
        if streaming and kind is T.DONE:
            js.reset()
    return events


CASES = [
    (b"  1024\n", [(T.NUMBER, "1024"), (T.DONE, None)]),
    (b"  true \n", [(T.TRUE, None), (T.DONE, None)]),
    (b"\nfalse\r\n", [(T.FALSE, None), (T.DONE, None)]),
    (b"\tnull", [(T.NULL, None), (T.DONE, None)]),
    (b'"foo"', [(T.STRING, "foo"), (T.DONE, None)]),
    (
        b'"Tim \\"The Tool Man\\" Taylor"',
        [(T.STRING, 'Tim "The Tool Man" Taylor'), (T.DONE, None)],
    ),
    (
        b'{"abc": -1}',
        [
            (T.OBJECT, None),
            (T.STRING, "abc"),
            (T.NUMBER, "-1"),
            (T.OBJECT_END, None),
            (T.DONE, None),
        ],
    ),
    (
        b'[1, "two", true, null]',
        [
            (T.ARRAY, None),
            (T.NUMBER, "1"),
            (T.STRING, "two"),
            (T.TRUE, None),
            (T.NULL, None),
            (T.ARRAY_END, None),
            (T.DONE, None),
        ],
    ),
    (
        b"[1, 2, 3",
        [
            (T.ARRAY, None),
            (T.NUMBER, "1"),
            (T.NUMBER, "2"),
            (T.NUMBER, "3"),
            (T.ERROR, None),
        ],
    ),
    (
        b'"\\u0068\\u0065\\u006c\\u006c\\u006F"',
        [(T.STRING, "hello"), (T.DONE, None)],
    ),
    (b'"\\uD800\\u0065"', [(T.ERROR, None)]),
    (b'"\\uDC00"', [(T.ERROR, None)]),
    (b'":\\uDc00\\uD800"', [(T.ERROR, None)]),
    (b'":\\uD800\\uDC00"', [(T.STRING, ":\U00010000"), (T.DONE, None)]),
]


@pytest.mark.parametrize("data,expected", CASES)
def test_non_streaming_cases(data, expected):
    assert collect(data, False, len(expected)) == expected


STREAM_CASES = [
    (
        b"1 10 100 2002",
        [
            (T.NUMBER, "1"),
            (T.DONE, None),
            (T.NUMBER, "10"),
            (T.DONE, None),
            (T.NUMBER, "100"),
            (T.DONE, None),
            (T.NUMBER, "2002"),
            (T.DONE, None),
            (T.DONE, None),
        ],
    ),
    (
        b'{"foo": [1, 2, 3]}\n[]\n"name"',
        [
            (T.OBJECT, None),
            (T.STRING, "foo"),
            (T.ARRAY, None),
            (T.NUMBER, "1"),
            (T.NUMBER, "2"),
            (T.NUMBER, "3"),
            (T.ARRAY_END, None),
            (T.OBJECT_END, None),
            (T.DONE, None),
            (T.ARRAY, None),
            (T.ARRAY_END, None),
            (T.DONE, None),
            (T.STRING, "name"),
            (T.DONE, None),
            (T.DONE, None),
        ],
    ),
    (b" \n", [(T.DONE, None)]),
]


@pytest.mark.parametrize("data,expected", STREAM_CASES)
def test_streaming_cases(data, expected):
    assert collect(data, True, len(expected)) == expected


def test_stream_separation():
    js = JsonStream.from_bytes(b"1\n10 \n100 \n 2002", streaming=True)
    numbers = []
    separators = []
    while True:
        kind = js.next()
        if kind is T.DONE:
            if not numbers or numbers[-1] is None:
                break
            c = None
            while is_space(c := js.source_peek()):
                js.source_get()
                if c == ord("\n"):
                    break
            separators.append(c)
            js.reset()
            numbers.append(None)
        else:
            numbers.append(js.string())
    assert [n for n in numbers if n is not None] == ["1", "10", "100", "2002"]
    assert separators == [ord("\n"), ord("\n"), ord("\n"), None]


def test_surrogate_errors_carry_messages():
    with pytest.raises(JsonParseError, match="dangling surrogate"):
        JsonStream.from_bytes(b'"\\uDC00"').next()
    with pytest.raises(JsonParseError, match="out of range"):
        JsonStream.from_bytes(b'"\\uD800\\u0065"').next()


def test_error_reports_line_number():
    js = JsonStream.from_bytes(b"[\n1,\n x]", streaming=False)
    assert js.next() is T.ARRAY
    assert js.next() is T.NUMBER
    with pytest.raises(JsonParseError) as info:
        js.next()
    assert info.value.lineno == 3
    assert "unexpected byte 'x' in value" in info.value.message


def test_error_is_sticky_until_reset():
    js = JsonStream.from_bytes(b"[1, 2, 3", streaming=True)
    assert list(js.next() for _ in range(4))[-1] is T.NUMBER
    with pytest.raises(JsonParseError):
        js.next()
    first = js.error
    with pytest.raises(JsonParseError) as info:
        js.next()
    assert info.value.message == first
    js.reset()
    assert js.error is None
    assert js.next() is T.DONE


def test_trailing_text_rejected_when_not_streaming():
    js = JsonStream.from_bytes(b"1 x", streaming=False)
    assert js.next() is T.NUMBER
    with pytest.raises(JsonParseError, match="expected end of text"):
        js.next()


def test_trailing_text_left_when_streaming():
    js = JsonStream.from_bytes(b"1 x", streaming=True)
    assert js.next() is T.NUMBER
    assert js.next() is T.DONE
    assert js.source_peek() == ord(" ")


@pytest.mark.parametrize(
    "data,message",
    [
        (b"tru", "expected 'e'"),
        (b'"a\x01"', "unescaped control character"),
        (b'"\\q"', "invalid escaped byte"),
        (b'"abc', "unterminated string literal"),
        (b'{"a" 1}', "expected ':' after member name"),
        (b"{1: 2}", "expected member name or '}'"),
        (b'{"a": 1 "b"}', "expected ',' or '}' after member value"),
        (b"-x", "in number"),
        (b"1.", "expected digit"),
        (b"1e", "in number"),
        (b'"\xff"', "invalid UTF-8 character"),
        (b'"\xc3\x28"', "invalid UTF-8 text"),
        (b"", "unexpected end of text"),
        (b"]", "in value"),
    ],
)
def test_malformed_input(data, message):
    js = JsonStream.from_bytes(data, streaming=False)
    with pytest.raises(JsonParseError, match=message):
        while js.next() is not T.DONE:
            pass


def test_utf8_string_decoded():
    js = JsonStream.from_bytes('"caf\u00e9"'.encode("utf-8"))
    assert js.next() is T.STRING
    assert js.string() == "café"


def test_number_value():
    js = JsonStream.from_bytes(b"[-12.5e1, 0, 3E+2]")
    assert js.next() is T.ARRAY
    values = []
    while js.next() is T.NUMBER:
        values.append(js.number())
    assert values == [-125.0, 0.0, 300.0]


def test_number_before_any_token_is_zero():
    assert JsonStream.from_bytes(b"1").number() == 0.0


def test_peek_does_not_consume():
    js = JsonStream.from_bytes(b"[7]")
    assert js.next() is T.ARRAY
    assert js.peek() is T.NUMBER
    assert js.peek() is T.NUMBER
    assert js.next() is T.NUMBER
    assert js.string() == "7"
    assert js.next() is T.ARRAY_END


def test_context_and_depth():
    js = JsonStream.from_bytes(b'{"a": [1')
    assert js.context() == (T.DONE, 0)
    js.next()
    js.next()
    assert js.context() == (T.OBJECT, 1)
    js.next()
    assert js.depth == 2
    js.next()
    assert js.context() == (T.ARRAY, 1)


def test_skip_whole_value():
    js = JsonStream.from_bytes(b'[1, [2, 3], {"a": 4}] 5', streaming=True)
    assert js.skip() is T.ARRAY
    assert js.depth == 0
    assert js.next() is T.DONE
    js.reset()
    assert js.next() is T.NUMBER
    assert js.string() == "5"


def test_skip_until_object_end():
    js = JsonStream.from_bytes(b'{"a": [1], "b": 2}', streaming=False)
    assert js.next() is T.OBJECT
    assert js.skip_until(T.OBJECT_END) is T.OBJECT_END
    assert js.next() is T.DONE


def test_skip_until_reaches_done():
    js = JsonStream.from_bytes(b"[1]", streaming=True)
    assert js.skip_until(T.STRING) is T.DONE


def test_iteration_stops_at_done():
    assert list(JsonStream.from_bytes(b"[1, true]")) == [
        T.ARRAY,
        T.NUMBER,
        T.TRUE,
        T.ARRAY_END,
    ]


def test_from_file_binary():
    js = JsonStream.from_file(io.BytesIO(b'{"k": null}'))
    assert list(js) == [T.OBJECT, T.STRING, T.NULL, T.OBJECT_END]


def test_from_file_text():
    js = JsonStream.from_file(io.StringIO('"\u00e9t\u00e9"'))
    assert js.next() is T.STRING
    assert js.string() == "été"


def test_from_string_and_position():
    js = JsonStream.from_string("  true")
    assert js.next() is T.TRUE
    assert js.position == 6


def test_source_get_counts_lines():
    js = JsonStream.from_bytes(b"\n\nx")
    assert js.source_get() == ord("\n")
    assert js.source_get() == ord("\n")
    assert js.lineno == 3
    assert js.source_get() == ord("x")
    assert js.source_get() is None