"""
Column renderer: lays out several text runs side by side.

Each column gets a share of the usable screen width proportional to its
weight (usable width = screen width minus every left and right padding),
rounded half up. Rows are produced by asking the layout engine for one line
per column; every column keeps its own Cursor, so attributes and positions
carry from row to row. Rendering stops at the first row where no column has
anything visible left.

Example
    column_format(2, [40, 60], [names, description], [1, 0], [1, 0], "|")
    renders one help entry: names on the left, the wrapped description on the right.
"""
import logging
from collections.abc import Sequence

from .faults import LayoutError, LayoutTooNarrowError
from .layout import Cursor, exhausted, format_line, hyphen, encode
from .utils import round_half_up

log = logging.getLogger(__name__)

RESET = b"\033[0m"


def _check(name, values, columns):
    if not isinstance(values, Sequence) or isinstance(values, str | bytes):
        raise LayoutError(f"column_format() {name!r} must be a sequence")
    if len(values) != columns:
        raise LayoutError(f"column_format() {name!r}: invalid number of elements, {columns} expected")


def widths(columns, weights, left_paddings, right_paddings, width, /):
    """
    Allocate the visible width of every column.

    Raises
    - LayoutError: mismatched vectors, non-positive weights, negative paddings.
    - LayoutTooNarrowError: fewer usable columns than columns to render, or a
      column rounded down to nothing.
    """
    if not isinstance(columns, int) or columns < 1:
        raise LayoutError("column_format() 'columns' must be a positive integer")
    _check("weights", weights, columns)
    _check("left_paddings", left_paddings, columns)
    _check("right_paddings", right_paddings, columns)

    for column in range(columns):
        if not weights[column] > 0:
            raise LayoutError(f"column_format() all weights must be larger than zero, column {column} is not")
        if left_paddings[column] < 0:
            raise LayoutError(f"column_format() the left padding of column {column} is negative")
        if right_paddings[column] < 0:
            raise LayoutError(f"column_format() the right padding of column {column} is negative")

    usable = width - sum(left_paddings) - sum(right_paddings)
    if usable < columns:
        raise LayoutTooNarrowError(f"cannot render {columns} column(s) in {usable} usable column(s)")

    total = sum(weights)
    allocated = []
    for column in range(columns):
        value = round_half_up(usable * (weights[column] / total))
        if value < 1:
            raise LayoutTooNarrowError(f"column {column} would be {value} column(s) wide")
        allocated.append(value)

    log.debug("usable width %d split into %r", usable, allocated)
    return allocated


def column_format(columns, weights, texts, left_paddings, right_paddings, soft_hyphen=0, break_all=False, *, width=80):
    """
    Render `texts` as `columns` side-by-side columns on a `width`-wide screen.

    Parameters
    - columns: number of columns.
    - weights: positive relative widths, one per column.
    - texts: one text per column (str, bytes or TextRun).
    - left_paddings, right_paddings: blank columns around every column.
    - soft_hyphen: soft-hyphen character shared by all columns (0 disables it).
    - break_all: break lines at any character (scripts without word boundaries).
    - width: screen width.

    Returns
    - str: the rows, each terminated by a newline.
    """
    allocated = widths(columns, weights, left_paddings, right_paddings, width)
    _check("texts", texts, columns)

    runs = [encode(text) for text in texts]
    soft_hyphen = 0 if break_all else hyphen(soft_hyphen)
    cursors = [Cursor() for _ in range(columns)]
    output = bytearray()

    def finished():
        return all(exhausted(run, cursor.position, soft_hyphen) for run, cursor in zip(runs, cursors))

    while not finished():
        for column in range(columns):
            output += b" " * left_paddings[column]
            if exhausted(runs[column], cursors[column].position, soft_hyphen):
                output += b" " * allocated[column]
            else:
                format_line(runs[column], cursors[column], allocated[column], soft_hyphen, break_all=break_all, out=output)
                if cursors[column].attribute:
                    output += RESET
            output += b" " * right_paddings[column]
        output += b"\n"

    return output.decode("utf-8", "surrogateescape")


def wrap_text(text, left_padding=0, right_padding=0, soft_hyphen=0, break_all=False, *, width=80):
    """
    Lay out a single text across the screen with the given paddings.
    """
    return column_format(1, [1], [text], [left_padding], [right_padding], soft_hyphen, break_all, width=width)


__all__ = (
    "widths",
    "column_format",
    "wrap_text",
)
