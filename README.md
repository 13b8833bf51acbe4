# starframe

A small toolkit for drawing on a character terminal and for reading JSON one
event at a time. It has no dependencies beyond the standard library.

## What is inside

- `starframe.cells`: `Vec2` (an integer vector that supports `+`),
  `CellPos` (an unsigned 16-bit cell position) and `FormattedChar` (a
  character with up to three ANSI SGR arguments, whose `render()` gives the
  text that draws it).
- `starframe.framebuffer`: `FrameBuffer`, a grid of `FormattedChar` cells.
  You can resize it (`set_size`), clear it to spaces (`clear`), make it
  transparent (`fill_with_empty`), read and write cells (`cell`, `put`,
  `set_char`, `set_formatted`), copy it (`copy`, `copy_cells_from`), render
  it to ANSI text (`render`) and write it to a stream (`print`). The module
  also has helpers that return escape sequences (`clear_terminal_sequence`,
  `goto_sequence`, `resize_sequence`, `clear_area_text`), `terminal_fits`,
  and the context manager `unbuffered_terminal`, which turns off line
  buffering and echo on a POSIX terminal.
- `starframe.draw`: `emplace_string`, `fill_rectangle`,
  `fill_rectangle_with` (with `Fill.SPACE` or `Fill.TRANSPARENT`),
  `format_rectangle`, `draw_window` (a double-line frame), and Bresenham
  lines through `line_points`, `draw_points` and `draw_line`. Operations that
  do not fit raise `DrawError`.
- `starframe.keys`: `read_key(stream)` reads one key press and returns the
  first character together with a `Key` value for arrow, diagonal, function
  and control keys; `is_std_char` tests for printable ASCII.
- `starframe.dialogs`: `input_int` and `input_int_range` prompt for an
  unsigned 16-bit number; `confirm_window` shows a yes/no window over a frame
  buffer and returns `True` for yes.
- `starframe.dynarray`: `DynArray`, an array whose capacity grows in fixed
  steps and is capped (exceeding it raises `CapacityError`).
- `starframe.segarray`: `SegmentedArray`, an array that grows by adding
  fixed-size `Segment`s.
- `starframe.json_source`: `JsonType`, `JsonParseError`, `is_space`, and the
  byte sources `BufferSource`, `StreamSource` and `CallableSource`.
- `starframe.json_stream`: `JsonStream`, a pull tokenizer for JSON.
- `starframe.jsontool`: `pretty`, `token_listing` and the `starframe-json`
  command.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## A frame buffer

```python
from starframe.framebuffer import FrameBuffer
from starframe.draw import draw_window

screen = FrameBuffer(20, 6)
screen.clear()
draw_window(screen, 0, 0, 10, 4)
screen.set_char(2, 2, "h")
screen.set_char(3, 2, "i")
text = screen.render()
```

`render()` gives the whole grid as text with each cell's ANSI formatting,
followed by a cursor-home sequence. `print(out)` writes it to a stream; when
that stream is a terminal it first asks the terminal to take the buffer's
size and waits for Enter while the terminal is too small.

## Reading JSON event by event

```python
from starframe.json_stream import JsonStream

stream = JsonStream.from_string('{"abc": -1}', False)
kind = stream.next()       # JsonType.OBJECT
kind = stream.next()       # JsonType.STRING
name = stream.string()     # "abc"
kind = stream.next()       # JsonType.NUMBER
value = stream.number()    # -1.0
```

`JsonStream` can also read from bytes (`from_bytes`), file objects
(`from_file`) or any `Source`. `peek`, `skip`, `skip_until`, `context`,
`depth`, `lineno` and `position` help walk the events, and iterating over a
stream yields the events of the current value. With streaming turned on
(the default), a stream may hold several top-level values; each ends with
`JsonType.DONE` and `reset()` moves on to the next. Malformed text raises
`JsonParseError`, which carries the line number.

## Command line

`starframe-json` pretty-prints one JSON value read from the file named on the
command line, or from standard input when no file is given:

```
starframe-json data.json
```

With `--tokens` it instead lists the events of every consecutive value in the
input:

```
starframe-json --tokens data.json
```

Malformed input in pretty-printing mode is reported on standard error with
its line number, and the command exits with status 1.

## What it does not do

- It is a toolkit, not a full-screen application: there is no main menu,
  event loop or screen manager beyond the single yes/no window in
  `starframe.dialogs`.
- `emplace_string` supports only the row (`StringMode.VERT`) and column
  (`StringMode.HOR`) layouts; the folding modes raise `DrawError`.
- `pretty` writes decoded strings as they are, without escaping them again,
  so its output is not always valid JSON.
- Terminal size checks and unbuffered input rely on POSIX terminal support.