r"""
Text layout engine: word-wraps one run of UTF-8 text into fixed-width lines.

A run is an immutable byte string (TextRun) that may embed

- attribute escapes ``ESC [ d m`` with ``d`` in 0, 1, 2, 4, 5, 7, 8: copied to
  the output byte for byte, never counted as visible columns;
- a soft hyphen (one configurable ASCII byte, ``|`` in the help texts): a
  preferred break point, rendered as ``-`` only when the line breaks there and
  dropped otherwise;
- the non-breaking space ``0x1D``: rendered as a space, never a break point.

format_line() produces exactly one line per call and advances a Cursor, so
several runs can be laid out side by side one line at a time (see columns.py).
The Cursor also carries the text attribute in effect at the end of the last
emitted line; every line starts by re-opening it.

Scanning is a small state machine:

- SCANNING_WORD: accumulating visible characters of the current word;
- AT_BREAK: a space, control byte or soft hyphen closes the word;
- IN_ESCAPE: an attribute escape joins the current word with zero width;
- IN_MULTI_BYTE: continuation bytes of a UTF-8 character join the word
  without being counted (the lead byte counted the character).

Before a character is added, the line is checked for room. When it is full:

- the byte at hand is a space or control byte: the word fits exactly, the line ends;
- nothing on the line offers a break point: the word is cut where it is;
- otherwise the word is dropped, a ``-`` is written when the last break point
  was a soft hyphen, and the cursor rewinds to that break point.

Example
    >>> list(TextRun("a quick brown fox").lines(8))
    [b'\x1b[0ma quick ', b'\x1b[0mbrown   ', b'\x1b[0mfox     ']
"""
import enum
import logging

from .utils import mirror

log = logging.getLogger(__name__)

ESCAPE = 0x1B
NON_BREAKING_SPACE = 0x1D
SPACE = 0x20
DELETE = 0x7F

ATTRIBUTES = frozenset(b"0124578")


class ScanState(enum.Enum):
    SCANNING_WORD = enum.auto()
    AT_BREAK = enum.auto()
    IN_ESCAPE = enum.auto()
    IN_MULTI_BYTE = enum.auto()


class Cursor:
    """
    Resumable position in a run plus the carried text attribute.

    position: first unconsumed byte (len(run) once everything was emitted).
    attribute: last attribute code (0-8) emitted on a line of this run.
    """

    __slots__ = ("position", "attribute")

    def __init__(self, position=0, attribute=0):
        self.position = position
        self.attribute = attribute

    def __repr__(self):
        return "Cursor(position=%r, attribute=%r)" % (self.position, self.attribute)


class TextRun:
    """
    Immutable UTF-8 text to be laid out.

    Accepts str (encoded as UTF-8, lone surrogates from undecodable input are
    mapped back to their bytes) or any bytes-like object.
    """

    __slots__ = ("_data",)

    data = mirror("data")

    def __init__(self, text=b"", /):
        self._data = encode(text)

    def __bytes__(self):
        return self._data

    def __len__(self):
        return len(self._data)

    def __eq__(self, other):
        if isinstance(other, TextRun):
            return self._data == other._data
        return NotImplemented

    def __hash__(self):
        return hash(self._data)

    def __repr__(self):
        return "TextRun(%r)" % self._data

    @property
    def width(self):
        """Number of visible columns of the whole run."""
        return visible_width(self._data)

    def exhausted(self, cursor, soft_hyphen=0, /):
        return exhausted(self._data, cursor.position, soft_hyphen)

    def lines(self, limit, soft_hyphen=0, *, break_all=False):
        """
        Yield every line of the run laid out at `limit` visible columns.
        """
        cursor = Cursor()
        soft_hyphen = 0 if break_all else hyphen(soft_hyphen)
        while not exhausted(self._data, cursor.position, soft_hyphen):
            yield format_line(self._data, cursor, limit, soft_hyphen, break_all=break_all)


def encode(text):
    if isinstance(text, TextRun):
        return text.data
    if isinstance(text, str):
        return text.encode("utf-8", "surrogateescape")
    if isinstance(text, bytes | bytearray | memoryview):
        return bytes(text)
    raise TypeError("text must be a string or a bytes-like object")


def hyphen(value, /):
    """
    Normalize a soft-hyphen designation to a byte value (0 when disabled).

    Accepts a one-character ASCII string, a one-byte bytes object, an integer
    byte value, or a falsey value (None, 0, "", b"") to disable the feature.
    """
    if not value:
        return 0
    if isinstance(value, str | bytes):
        if len(value) != 1:
            raise ValueError("soft hyphen must be a single character")
        value = ord(value)
    if not isinstance(value, int):
        raise TypeError("soft hyphen must be a character or a byte value")
    if not SPACE < value < DELETE:
        raise ValueError("soft hyphen must be a printable ASCII character other than space")
    return value


def _blank(byte):
    return byte <= SPACE or byte == DELETE


def _breaker(byte):
    # spaces and control bytes break words; the non-breaking space does not
    return _blank(byte) and byte != NON_BREAKING_SPACE


def _sequence(byte):
    """Continuation bytes expected after a UTF-8 lead byte (0 when not a lead byte)."""
    if byte & 0xE0 == 0xC0:
        return 1
    if byte & 0xF0 == 0xE0:
        return 2
    if byte & 0xF8 == 0xF0:
        return 3
    return 0


def _attribute(text, index):
    """Attribute code of the escape sequence starting at `index`, or None."""
    if (
        text[index] == ESCAPE and
        index + 3 < len(text) and
        text[index + 1] == ord("[") and
        text[index + 2] in ATTRIBUTES and
        text[index + 3] == ord("m")
    ):
        return text[index + 2] - ord("0")
    return None


def visible_width(text, /):
    """
    Count the visible columns of a text: UTF-8 characters, escapes excluded.

    Stray continuation bytes and invalid lead bytes count one column each,
    as format_line() lays them out.
    """
    text = encode(text)
    index, count, remaining = 0, 0, 0
    while index < len(text):
        byte = text[index]
        if remaining and byte & 0xC0 == 0x80:
            remaining -= 1
            index += 1
            continue
        remaining = 0
        if _attribute(text, index) is not None:
            index += 4
            continue
        count += 1
        remaining = _sequence(byte)
        index += 1
    return count


def strip_attributes(text, /):
    """
    Return the bytes of a text with every attribute escape removed.
    """
    text = encode(text)
    output = bytearray()
    index = 0
    while index < len(text):
        if _attribute(text, index) is not None:
            index += 4
            continue
        output.append(text[index])
        index += 1
    return bytes(output)


def exhausted(text, position, soft_hyphen=0, /):
    """
    True when nothing visible is left in `text` from `position` on.

    Spaces, control bytes, soft hyphens and attribute escapes do not count as
    visible; a column whose remainder holds only those has nothing to show.
    """
    text = encode(text)
    while position < len(text):
        byte = text[position]
        if _attribute(text, position) is not None:
            position += 4
        elif _breaker(byte) or (soft_hyphen and byte == soft_hyphen):
            position += 1
        else:
            return False
    return True


class _Line:
    """
    Scanner state for one call of format_line().

    output/count: committed bytes and their visible columns.
    word/width: the word being accumulated (may start with a carried space).
    shade: last attribute escape met inside the current word.
    breakpoint: byte offset of the last break point on this line, None before the first one.
    hyphenated: the last break point was a soft hyphen.
    """

    def __init__(self, cursor):
        self.cursor = cursor
        self.output = bytearray(b"\033[%dm" % cursor.attribute)
        self.count = 0
        self.word = bytearray()
        self.width = 0
        self.shade = None
        self.breakpoint = None
        self.hyphenated = False
        self.state = ScanState.SCANNING_WORD
        self.remaining = 0

    def classify(self, text, position, soft_hyphen):
        byte = text[position]
        if self.remaining:
            if byte & 0xC0 == 0x80:
                return ScanState.IN_MULTI_BYTE
            # broken sequence: the byte starts a new character
            self.remaining = 0
        if _attribute(text, position) is not None:
            return ScanState.IN_ESCAPE
        if _breaker(byte) or (soft_hyphen and byte == soft_hyphen):
            return ScanState.AT_BREAK
        return ScanState.SCANNING_WORD

    def commit(self):
        self.output += self.word
        self.count += self.width
        # the last escape of the word is the attribute in effect after it
        if self.shade is not None:
            self.cursor.attribute = self.shade
        self.word = bytearray()
        self.width = 0
        self.shade = None

    def drop(self):
        """Discard the current word and return the position to resume from."""
        self.word = bytearray()
        self.width = 0
        self.shade = None
        if not self.hyphenated:
            return self.breakpoint
        self.output += b"-"
        self.count += 1
        return self.breakpoint + 1

    def pad(self, limit):
        if limit > self.count:
            self.output += b" " * (limit - self.count)


def format_line(text, cursor, limit, soft_hyphen=0, *, break_all=False, out=None):
    """
    Lay out the next line of `text` starting at `cursor`.

    Parameters
    - text: TextRun | bytes | str
    - cursor: Cursor, advanced to the first unconsumed byte and updated with the
      attribute in effect at the end of the line.
    - limit: visible columns of the line (>= 1).
    - soft_hyphen: soft-hyphen byte (see hyphen()); 0 disables the feature.
    - break_all: break at any character boundary instead of word boundaries
      (soft hyphens are ignored in this mode).
    - out: optional bytearray sink the line is appended to.

    Returns
    - bytes: the formatted line, exactly `limit` visible columns wide.
    """
    text = encode(text)
    if not isinstance(limit, int) or limit < 1:
        raise ValueError("format_line() limit must be a positive integer")
    soft_hyphen = 0 if break_all else hyphen(soft_hyphen)

    line = _Line(cursor)
    position = cursor.position
    length = len(text)

    # left-trim, never inside an escape sequence
    while position < length and _breaker(text[position]) and text[position] != ESCAPE:
        position += 1

    while position < length:
        byte = text[position]
        line.state = line.classify(text, position, soft_hyphen)

        match line.state:
            case ScanState.IN_MULTI_BYTE:
                line.word.append(byte)
                line.remaining -= 1
                position += 1
                continue
            case ScanState.IN_ESCAPE:
                line.word += text[position:position + 4]
                line.shade = text[position + 2] - ord("0")
                position += 4
                continue

        if line.count + line.width + 1 > limit:
            if line.state is ScanState.AT_BREAK and _breaker(byte):
                # the word fits exactly
                line.commit()
            elif break_all or line.breakpoint is None:
                # single overlong word: cut it here
                line.commit()
            else:
                position = line.drop()
            line.pad(limit)
            break

        if line.state is ScanState.AT_BREAK:
            if line.count + line.width == 0:
                # nothing visible yet: separators and soft hyphens are dropped
                line.commit()
            else:
                line.commit()
                line.breakpoint = position
                line.hyphenated = not _breaker(byte)
                if not line.hyphenated:
                    line.word.append(SPACE)
                    line.width = 1
            position += 1
            continue

        line.word.append(SPACE if byte == NON_BREAKING_SPACE else byte)
        line.width += 1
        line.remaining = _sequence(byte)
        position += 1
    else:
        line.commit()
        line.pad(limit)

    cursor.position = position
    log.debug("line of %d columns, cursor at %d/%d", limit, position, length)

    result = bytes(line.output)
    if out is not None:
        out += result
    return result


__all__ = (
    "ESCAPE",
    "NON_BREAKING_SPACE",
    "ScanState",
    "Cursor",
    "TextRun",
    "encode",
    "hyphen",
    "visible_width",
    "strip_attributes",
    "exhausted",
    "format_line",
)
