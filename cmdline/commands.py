"""
cmdline command layer: declare, parse, document.

What this module provides
- Parser: owns the Registry and the ValueStore of one program run.
  • define_option / define_argument / define_operand (and the typed
    shortcuts parser.argument.string/int/double) declare the surface.
  • parse() walks the vector once and returns an Arguments accessor, or
    raises a positioned ParseFault through trigger().
  • generate_doc() / wrap_text() / column_format() render help text with the
    layout engine at the parser's screen width.
  • run() wires it all for an entry point: help -> 0, fault -> 1, otherwise
    the callback decides.

Token grammar
- "--name"           long option, or long argument taking the next token as value
- "--"               syntax error (two dashes without a name)
- "-abc"             cluster of one-letter names; at most one may be an argument
- "-"  and the rest  operands, collected in order

Values are converted when their token is read: strings as-is, integers as
signed 64-bit whole numbers, doubles as finite decimal numbers.

Every fault carries the command line rebuilt from the trimmed tokens (empty
ones skipped, single spaces between the others) and the byte offset of the
offending token, or letter for cluster faults, so the diagnostic can point at it.

Quick start
    from cmdline import Parser

    parser = Parser(["explorer", "-h", "10.0.0.1", "-p", "5432", "mydb"])
    parser.argument.string("host", "h", "host_name", "The host name.", default="127.0.0.1")
    parser.argument.int("port", "p", "port", "The port.", default=50000)
    parser.define_operand("database", "The name of the database.")
    parser.restrict_operands()

    arguments = parser.parse()
    arguments.get_string("host")   # "10.0.0.1"
    arguments.get_int("port")      # 5432
    arguments.operands             # ("mydb",)
"""
import difflib
import enum
import logging
import math
import re
import sys

from rich.console import Console
from rich.text import Text

from .arguments import Argument, Operand, Option, Registry, ValueType
from .columns import column_format, wrap_text
from .diagnostics import DEFAULT_WIDTH, Diagnostic
from .faults import *
from .layout import hyphen
from .utils import *
from .values import Arguments, ValueStore

log = logging.getLogger(__name__)

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DOUBLE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ParserState(enum.Enum):
    NORMAL = enum.auto()
    AWAITING_VALUE = enum.auto()


def _size(text):
    return len(text.encode("utf-8", "surrogateescape"))


def reconstruct(tokens, /):
    """
    Rebuild the command line from trimmed tokens.

    Returns
    - (line, offsets): the non-empty tokens joined by single spaces, and the
      byte offset in that line where each token (empty ones included) starts.
    """
    line, offsets, size = [], [], 0
    for token in tokens:
        if token and line:
            size += 1
        offsets.append(size)
        if token:
            line.append(token)
            size += _size(token)
    return " ".join(line), offsets


class ArgumentSpecifier:
    """
    Typed shortcuts for declaring arguments: parser.argument.string(...), .int(...), .double(...).

    Each takes (name, letter, value_name, description) and an optional
    keyword-only default; without a default the argument is mandatory.
    """

    def __init__(self, parser):
        self._parser = parser

    def string(self, name, letter=Unset, value_name=Unset, description=Unset, *, default=Unset):
        return self._parser.define_argument(name, letter, ValueType.STRING, value_name, description, default=default)

    def int(self, name, letter=Unset, value_name=Unset, description=Unset, *, default=Unset):
        return self._parser.define_argument(name, letter, ValueType.INT, value_name, description, default=default)

    def double(self, name, letter=Unset, value_name=Unset, description=Unset, *, default=Unset):
        return self._parser.define_argument(name, letter, ValueType.DOUBLE, value_name, description, default=default)


class Parser:
    """
    Declares and parses the command line of one program run.

    Parameters
    - argv: the full vector, program name first (defaults to sys.argv). It is
      copied; the caller's list and strings are never modified.
    - width: screen width for diagnostics and generated documentation.
    - shell: print faults to standard error and exit with status 1 instead of raising.
    - fancy: draw faults inside a rich panel.
    - colorful: style faults with the palette (see CommandException.__rich__).
    - soft_hyphen: soft-hyphen character of descriptions and help prose.
    """

    def __init__(self, argv=Unset, /, *, width=DEFAULT_WIDTH, shell=False, fancy=False, colorful=True, soft_hyphen="|"):
        argv = tuple(coalesce(argv, sys.argv))
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("Parser() vector must contain strings only")
        if not isinstance(width, int) or width < 1:
            raise ValueError("Parser() width must be a positive integer")

        self._argv = argv
        self._width = width
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._soft_hyphen = hyphen(soft_hyphen)
        self._registry = Registry()
        self._store = ValueStore()
        self._parsed = False
        self._line = ""
        self._offsets = []

        self.argument = ArgumentSpecifier(self)

    argv = mirror("argv")
    width = mirror("width")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    @property
    def registry(self):
        return self._registry

    @property
    def prog(self):
        return trim(self._argv[0]) if self._argv else ""

    # -- declarations ------------------------------------------------------

    def _define(self, definition):
        if self._parsed:
            raise RuntimeError("definitions are frozen once parsing has begun")
        self._registry.add(definition)
        self._store.seed(definition)
        return definition

    def define_option(self, name, letter=Unset, description=Unset):
        """Declare a boolean flag."""
        return self._define(Option(name, letter, description))

    def define_operand(self, name, description=Unset):
        """Declare the next positional operand."""
        return self._define(Operand(name, description))

    def define_argument(self, name, letter=Unset, type=ValueType.STRING, value_name=Unset, description=Unset, *, default=Unset):
        """Declare a typed argument; mandatory unless a default is given."""
        return self._define(Argument(name, letter, type, value_name, description, default=default))

    def restrict_operands(self):
        """Make operands beyond the declared ones a parse fault."""
        self._registry.restrict()

    # -- faults ------------------------------------------------------------

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's rendering options (see faults.trigger).
        """
        trigger(fault, **options, shell=self._shell, fancy=self._fancy, colorful=self._colorful, prog=self.prog)

    def _fault(self, exception, message, position, /, **options):
        diagnostic = Diagnostic(message, self._line, position, self._width)
        log.debug("fault %s at byte %d of %r", options.get("code"), position, self._line)
        self.trigger(exception(message, diagnostic=diagnostic, docs=getdoc(options["code"]), **options))

    def _help_hint(self, what):
        return "run '%s --help' to see all available %s" % (self.prog, what)

    # -- parsing -----------------------------------------------------------

    def parse(self):
        """
        Parse the vector into the value store.

        Returns
        - Arguments: read accessor over the store.

        Raises (when shell is False; in shell mode the fault is printed and the process exits)
        - UnknownArgumentError, SyntaxFault, UnknownArgumentLetterError,
          MultipleArgumentsInClusterError, TooManyOperandsError,
          InvalidIntegerError, IntegerOutOfRangeError, InvalidDoubleError,
          DoubleOutOfRangeError, MissingValueError.
        - RuntimeError: parse() was already called.
        """
        if self._parsed:
            raise RuntimeError("parse() can only be called once per parser")
        self._parsed = True

        tokens = [trim(token) for token in self._argv]
        self._line, self._offsets = reconstruct(tokens)
        if tokens:
            self._store.record(tokens[0])

        state = ParserState.NORMAL
        pending = None

        for index, token in enumerate(tokens[1:], 1):
            if not token:
                continue

            if state is ParserState.AWAITING_VALUE:
                log.debug("value %r for %r", token, pending.name)
                self._store.store(pending, self._convert(pending, token, index))
                state, pending = ParserState.NORMAL, None
            elif token == "--":
                self._fault(
                    SyntaxFault,
                    "two dashes without a name at %s position" % ordinal(index),
                    self._offsets[index],
                    title="syntax error",
                    code=FaultCode.SYNTAX_ERROR,
                    hint="write '--name' for a long name, or remove the dashes",
                )
            elif token.startswith("--"):
                definition = self._long(token, index)
                log.debug("long name %r resolved to %r", token, definition)
                if isinstance(definition, Option):
                    self._store.activate(definition.name)
                else:
                    state, pending = ParserState.AWAITING_VALUE, definition
            elif token.startswith("-") and len(token) > 1:
                if (definition := self._cluster(token, index)) is not None:
                    state, pending = ParserState.AWAITING_VALUE, definition
            else:
                log.debug("operand %r", token)
                self._operand(token, index)

        if state is ParserState.AWAITING_VALUE:
            self._fault(
                MissingValueError,
                "argument '--%s' expects a %s value after it" % (pending.name, pending.type.name.lower()),
                _size(self._line),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                argument=pending,
                hint="add the value after the argument (for example: --%s <%s>)" % (pending.name, pending.value_name),
            )

        return Arguments(self._registry, self._store)

    def _long(self, token, index):
        name = token[2:]
        try:
            definition = self._registry.by_name(name)
        except KeyError:
            definition = None

        if not isinstance(definition, Option | Argument):
            candidates = ["--" + each.name for each in self._registry if not isinstance(each, Operand)]
            suggestions = difflib.get_close_matches(token, candidates, 5)
            try:
                hint = "did you mean %r? you can also %s" % (suggestions[0], self._help_hint("arguments"))
            except IndexError:
                hint = self._help_hint("arguments")
            self._fault(
                UnknownArgumentError,
                "unknown argument %r at %s position" % (token, ordinal(index)),
                self._offsets[index],
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                input=token,
                suggestions=suggestions,
                hint=hint,
            )
        return definition

    def _cluster(self, token, index):
        """
        Resolve a cluster of one-letter names; return the argument awaiting a value, if any.
        """
        found = None
        for offset, letter in enumerate(token[1:], 1):
            try:
                definition = self._registry.by_letter(letter)
            except KeyError:
                self._fault(
                    UnknownArgumentLetterError,
                    "unknown argument letter %r at %s position" % (letter, ordinal(index)),
                    self._offsets[index] + _size(token[:offset]),
                    title="unknown argument letter",
                    code=FaultCode.UNKNOWN_ARGUMENT_LETTER,
                    input=letter,
                    hint=self._help_hint("one-letter names"),
                )

            if isinstance(definition, Option):
                log.debug("letter %r activates %r", letter, definition.name)
                self._store.activate(definition.name)
                continue

            if found is not None:
                self._fault(
                    MultipleArgumentsInClusterError,
                    "only one letter of a cluster can take a value, but both %r and %r do (at %s position)" % (
                        found.letter, letter, ordinal(index)
                    ),
                    self._offsets[index] + _size(token[:offset]),
                    title="multiple arguments in cluster",
                    code=FaultCode.MULTIPLE_ARGUMENTS_IN_CLUSTER,
                    input=letter,
                    hint="each argument needs its own value, separate them (for example: -%s <%s> -%s <%s>)" % (
                        found.letter, found.value_name, letter, definition.value_name
                    ),
                )
            log.debug("letter %r awaits a value for %r", letter, definition.name)
            found = definition
        return found

    def _operand(self, token, index):
        declared = len(self._registry.operands)
        if self._registry.restricted and len(self._store.operands) >= declared:
            self._fault(
                TooManyOperandsError,
                "unexpected operand %r at %s position, at most %d accepted" % (token, ordinal(index), declared),
                self._offsets[index],
                title="too many operands",
                code=FaultCode.TOO_MANY_OPERANDS,
                input=token,
                hint="remove this extra value or %s" % self._help_hint("operands"),
            )
        self._store.append(token)

    def _convert(self, definition, token, index):
        position = self._offsets[index]
        where = "for '--%s' at %s position" % (definition.name, ordinal(index))

        match definition.type:
            case ValueType.INT:
                if not _INTEGER.fullmatch(token):
                    self._fault(
                        InvalidIntegerError,
                        "invalid integer value %r %s" % (token, where),
                        position,
                        title="invalid integer",
                        code=FaultCode.INVALID_INTEGER,
                        input=token,
                        argument=definition,
                        hint="write a whole number, for example: --%s 42" % definition.name,
                    )
                # more than 19 significant digits never fits in 64 bits
                digits = token.lstrip("+-").lstrip("0")
                if len(digits) > 19 or not INT_MIN <= (value := int(token)) <= INT_MAX:
                    self._fault(
                        IntegerOutOfRangeError,
                        "integer value %r %s is out of range" % (token, where),
                        position,
                        title="integer out of range",
                        code=FaultCode.INTEGER_OUT_OF_RANGE,
                        input=token,
                        argument=definition,
                        hint="use a number between %d and %d" % (INT_MIN, INT_MAX),
                    )
                return value
            case ValueType.DOUBLE:
                if not _DOUBLE.fullmatch(token):
                    self._fault(
                        InvalidDoubleError,
                        "invalid double value %r %s" % (token, where),
                        position,
                        title="invalid double",
                        code=FaultCode.INVALID_DOUBLE,
                        input=token,
                        argument=definition,
                        hint="write a decimal number, for example: --%s 3.14" % definition.name,
                    )
                value = float(token)
                mantissa = re.split(r"[eE]", token)[0]
                if math.isinf(value) or (value == 0 and any(digit in "123456789" for digit in mantissa)):
                    self._fault(
                        DoubleOutOfRangeError,
                        "double value %r %s is out of range" % (token, where),
                        position,
                        title="double out of range",
                        code=FaultCode.DOUBLE_OUT_OF_RANGE,
                        input=token,
                        argument=definition,
                        hint="use a number a double can hold (about 1e-308 to 1e308)",
                    )
                return value
            case _:
                return token

    # -- documentation -----------------------------------------------------

    def column_format(self, columns, weights, texts, left_paddings, right_paddings, soft_hyphen=Unset, break_all=False):
        """Lay out columns at this parser's width (see columns.column_format)."""
        return column_format(
            columns, weights, texts, left_paddings, right_paddings,
            coalesce(soft_hyphen, self._soft_hyphen), break_all, width=self._width,
        )

    def wrap_text(self, text, left_padding=0, right_padding=0, soft_hyphen=Unset, break_all=False):
        """Lay out one text across the screen with the given paddings."""
        return wrap_text(text, left_padding, right_padding, coalesce(soft_hyphen, self._soft_hyphen), break_all, width=self._width)

    def generate_doc(self, soft_hyphen=Unset, break_all=False):
        """
        Render the help table: one entry per option and argument, sorted by long name.

        The left column holds the bold names (and the dim, underlined value name
        of arguments, glued with a non-breaking space); the right column holds
        the description. Entries are separated by a blank line.
        """
        entries = []
        for definition in sorted(self._registry, key=lambda each: each.name):
            if isinstance(definition, Operand):
                continue

            names = "\033[1m--%s\033[0m" % definition.name
            if definition.letter is not None:
                names += ", \033[1m-%s\033[0m" % definition.letter
            if isinstance(definition, Argument):
                names += "\035\033[2m\033[4m%s\033[0m" % definition.value_name

            entries.append(self.column_format(
                2,
                [40, 60],
                [names, definition.description],
                [1, 0],
                [1, 0],
                soft_hyphen,
                break_all,
            ))
        return "\n".join(entries)

    # -- entry point -------------------------------------------------------

    def run(self, callback=Unset, /, *, prologue=""):
        """
        Parse and dispatch, returning a process exit code.

        - help requested: print the prologue and the generated documentation, 0;
        - parse fault: print the diagnostic to standard error, 1;
        - otherwise: callback(arguments), its integer result or 0.
        """
        try:
            arguments = self.parse()
        except CommandException as fault:
            Console(stderr=True).print(fault)
            return 1

        if arguments.is_help_requested():
            Console().print(Text.from_ansi(prologue + self.generate_doc()), soft_wrap=True, highlight=False)
            return 0

        if callback is Unset:
            return 0
        result = callback(arguments)
        return 0 if result is None else int(result)


__all__ = (
    "INT_MIN",
    "INT_MAX",
    "ParserState",
    "reconstruct",
    "ArgumentSpecifier",
    "Parser",
)
