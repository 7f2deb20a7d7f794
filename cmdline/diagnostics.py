"""
Positioned diagnostics for command-line faults.

A Diagnostic couples a fault message with the reconstructed command line and
the byte offset of the offending token (or letter) in that line. Rendering
selects a window of the line no wider than the display width so the caret
always lands inside it:

- the caret is within the first ⌈2W/3⌉ columns, or the line is shorter than W:
  the window starts at the beginning of the line;
- the part of the line after the caret is shorter than the tail budget
  (W - ⌈2W/3⌉): the window is aligned to the end of the line;
- otherwise: the window starts ⌈2W/3⌉ columns before the caret.

Positions are byte offsets into the UTF-8 encoding of the line; windows are
computed on characters so multi-byte text keeps the caret under its glyph.

Example
    >>> diagnostic = Diagnostic("unknown argument '--prot'", "tool --prot 1", 5)
    >>> print(diagnostic.render())
    unknown argument '--prot'
    tool --prot 1
         ^
"""
from typing import NamedTuple

from rich.console import Group
from rich.text import Text

from .utils import mirror

DEFAULT_WIDTH = 80


class Window(NamedTuple):
    """Character window of a line: first column, caret offset inside it, and length."""
    start: int
    head: int
    length: int


def _encode(line):
    return line.encode("utf-8", "surrogateescape")


def _column(line, position):
    # character index of the byte offset
    return len(_encode(line)[:position].decode("utf-8", "surrogateescape"))


def window(length, column, width=DEFAULT_WIDTH, /) -> Window:
    """
    Compute the display window for a caret at `column` in a line of `length` characters.
    """
    if width < 1:
        raise ValueError("window() width must be a positive integer")

    head_budget = -(-2 * width // 3)
    tail_budget = width - head_budget

    if column < head_budget or length < width:
        return Window(0, column, min(width, length))
    if length - column < tail_budget:
        # a caret past the last character needs a column of its own
        end = max(length, column + 1)
        start = end - width
        return Window(start, column - start, length - start if end > length else width)
    return Window(column - head_budget, head_budget, width)


class Diagnostic:
    """
    Immutable fault snippet: message, full line and byte position of the fault.
    """

    __slots__ = ("_message", "_line", "_position", "_width")

    message = mirror("message")
    line = mirror("line")
    position = mirror("position")
    width = mirror("width")

    def __init__(self, message, line, position, width=DEFAULT_WIDTH, /):
        if not isinstance(message, str) or not isinstance(line, str):
            raise TypeError("Diagnostic() message and line must be strings")
        if not isinstance(position, int) or not 0 <= position <= len(_encode(line)):
            raise ValueError("Diagnostic() position must be a byte offset inside the line")
        self._message = message
        self._line = line
        self._position = position
        self._width = width

    @property
    def column(self):
        """Character column of the offending byte."""
        return _column(self._line, self._position)

    def window(self) -> Window:
        return window(len(self._line), self.column, self._width)

    def snippet(self) -> tuple[str, str]:
        """
        Return the windowed slice of the line and the caret line below it.
        """
        start, head, length = self.window()
        return self._line[start:start + length], " " * head + "^"

    def render(self) -> str:
        return "\n".join((self._message, *self.snippet()))

    def __rich__(self):
        excerpt, caret = self.snippet()
        return Group(Text(self._message, "red"), Text(excerpt), Text(caret, "bold"))

    def __repr__(self):
        return "Diagnostic(message=%r, line=%r, position=%r)" % (self._message, self._line, self._position)


__all__ = (
    "DEFAULT_WIDTH",
    "Window",
    "window",
    "Diagnostic",
)
