"""
cmdline faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  fault. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- CommandException: base type for parse faults. Carries the message plus the
  positioned Diagnostic and knows how to render itself with rich.
- Setup errors (DuplicateDefinitionError), layout errors (LayoutError,
  LayoutTooNarrowError) and query errors (UnsetArgumentError) are plain
  Python exceptions: they signal bugs in the calling program, not bad input.
- trigger(): central entry point to surface a parse fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message says which token went wrong
  (“at second position”) and the diagnostic points a caret at it.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser builds a fault and calls trigger(fault, **ctx).
- In non-shell mode, the fault is raised; in shell mode, it is rendered via rich
  to standard error and the process exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping (by high-level domain)
    - long names (2110x)
      • UNKNOWN_ARGUMENT, SYNTAX_ERROR
    - short clusters (2111x)
      • UNKNOWN_ARGUMENT_LETTER, MULTIPLE_ARGUMENTS_IN_CLUSTER
    - operands (2112x)
      • TOO_MANY_OPERANDS
    - values (2113x)
      • INVALID_INTEGER, INTEGER_OUT_OF_RANGE, INVALID_DOUBLE, DOUBLE_OUT_OF_RANGE,
        MISSING_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- long names ---
    UNKNOWN_ARGUMENT              = 21101
    SYNTAX_ERROR                  = 21102

    # --- short clusters ---
    UNKNOWN_ARGUMENT_LETTER       = 21111
    MULTIPLE_ARGUMENTS_IN_CLUSTER = 21112

    # --- operands ---
    TOO_MANY_OPERANDS             = 21121

    # --- values ---
    INVALID_INTEGER               = 21131
    INTEGER_OUT_OF_RANGE          = 21132
    INVALID_DOUBLE                = 21133
    DOUBLE_OUT_OF_RANGE           = 21134
    MISSING_VALUE                 = 21135

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DuplicateDefinitionError(ValueError):
    """
    Two definitions share a long name or a one-letter name.

    Raised while the program declares its arguments; this is a bug in the
    declarations and is never recovered from.
    """


class UnsetArgumentError(LookupError):
    """
    A mandatory argument was read although no value was given on the command line.
    """


class LayoutError(ValueError):
    """
    The column renderer was called with inconsistent vectors, weights or paddings.
    """


class LayoutTooNarrowError(LayoutError):
    """
    The screen is too narrow to host the requested columns.
    """


class CommandException(Exception):
    """
    base type for parse faults.

    positional
    - message: one lowercased sentence describing the fault.

    options (read-only mapping, merged by trigger())
    - code: FaultCode
    - title: short label shown in the header
    - hint: one actionable sentence
    - diagnostic: cmdline.diagnostics.Diagnostic (line, position, caret window)
    - shell, fancy, colorful, prog: rendering switches
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def diagnostic(self):
        return self.options.get("diagnostic")

    @property
    def line(self):
        return self.diagnostic.line if self.diagnostic is not None else None

    @property
    def position(self):
        return self.diagnostic.position if self.diagnostic is not None else None

    def __str__(self):
        if self.diagnostic is None:
            return str(self.message)
        return self.diagnostic.render()

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "error-line": "#E6E6F0",
            "caret": "bold #FFB400",  # amber caret under the offending byte
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styler(style))

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code is not None else "", "code"),
            " | ",
            text(str(self.options.get("title", "")).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        body = [message]

        if self.diagnostic is not None:
            window, caret = self.diagnostic.snippet()
            body.append(text(window, "error-line"))
            body.append(Text.assemble(caret[:-1], text(caret[-1], "caret")))

        if self.options.get("hint"):
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseFault(CommandException): ...
class UnknownArgumentError(ParseFault): ...
class SyntaxFault(ParseFault): ...
class UnknownArgumentLetterError(ParseFault): ...
class MultipleArgumentsInClusterError(ParseFault): ...
class TooManyOperandsError(ParseFault): ...
class InvalidIntegerError(ParseFault): ...
class IntegerOutOfRangeError(ParseFault): ...
class InvalidDoubleError(ParseFault): ...
class DoubleOutOfRangeError(ParseFault): ...
class MissingValueError(ParseFault): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "DuplicateDefinitionError",
    "UnsetArgumentError",
    "LayoutError",
    "LayoutTooNarrowError",
    "CommandException",
    "ParseFault",
    "UnknownArgumentError",
    "SyntaxFault",
    "UnknownArgumentLetterError",
    "MultipleArgumentsInClusterError",
    "TooManyOperandsError",
    "InvalidIntegerError",
    "IntegerOutOfRangeError",
    "InvalidDoubleError",
    "DoubleOutOfRangeError",
    "MissingValueError",
    "trigger",
    "getdoc",
)
