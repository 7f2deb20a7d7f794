"""
Value store filled by the parser and the read-only accessor handed to callers.

ValueStore
- three mappings keyed by long name (strings, ints, doubles), seeded with the
  defaults of optional arguments when they are registered;
- the set of activated option names;
- the operands in the order they were met (binding them to Operand
  definitions by position is left to the caller);
- the executable name (token 0 of the vector).

Arguments
- typed getters raising KeyError for undeclared names and UnsetArgumentError
  for mandatory arguments that were not supplied;
- is_help_requested(): no operands, no options and no definitions at all, or
  the option named "help" was given.
"""
from types import MappingProxyType

from .arguments import Argument, Option, ValueType
from .faults import UnsetArgumentError
from .utils import Unset, mirror

HELP = "help"


class ValueStore:
    """
    Typed storage written by the parser.
    """

    def __init__(self):
        self._strings = {}
        self._ints = {}
        self._doubles = {}
        self._options = set()
        self._operands = []
        self._executable = ""

    strings = mirror("strings")
    ints = mirror("ints")
    doubles = mirror("doubles")
    options = mirror("options")
    operands = mirror("operands")
    executable = mirror("executable")

    def _mapping(self, type):
        return {
            ValueType.STRING: self._strings,
            ValueType.INT: self._ints,
            ValueType.DOUBLE: self._doubles,
        }[type]

    def seed(self, definition):
        """Store the default of an optional argument (other definitions are ignored)."""
        if isinstance(definition, Argument) and definition.optional:
            self._mapping(definition.type)[definition.name] = definition.default

    def store(self, definition, value):
        """Store an already converted value for an argument."""
        self._mapping(definition.type)[definition.name] = value

    def activate(self, name):
        self._options.add(name)

    def append(self, operand):
        self._operands.append(operand)

    def record(self, executable):
        self._executable = executable

    def lookup(self, type, name):
        """Raw lookup; KeyError when nothing is stored under the name."""
        return self._mapping(type)[name]


class Arguments:
    """
    Read accessor over a completed ValueStore.
    """

    def __init__(self, registry, store):
        self._registry = registry
        self._store = store

    @property
    def executable(self):
        """Program name as given in token 0."""
        return self._store.executable

    @property
    def operands(self):
        """Operand values in command-line order."""
        return tuple(self._store.operands)

    @property
    def options(self):
        """Names of the activated options."""
        return frozenset(self._store.options)

    def _argument(self, name, type=Unset):
        definition = self._registry.by_name(name)
        if not isinstance(definition, Argument):
            raise KeyError(name)
        if type is not Unset and definition.type is not type:
            raise TypeError(f"argument {name!r} holds a {definition.type.name.lower()} value")
        return definition

    def get(self, name):
        """
        Value of an argument whatever its type.

        Raises
        - KeyError: no argument is declared under this name.
        - UnsetArgumentError: a mandatory argument was not given.
        """
        definition = self._argument(name)
        try:
            return self._store.lookup(definition.type, name)
        except KeyError:
            raise UnsetArgumentError(f"mandatory argument '--{name}' was not given") from None

    def get_string(self, name):
        self._argument(name, ValueType.STRING)
        return self.get(name)

    def get_int(self, name):
        self._argument(name, ValueType.INT)
        return self.get(name)

    def get_double(self, name):
        self._argument(name, ValueType.DOUBLE)
        return self.get(name)

    def is_set(self, name):
        """True when the option was given (KeyError when no option has this name)."""
        if not isinstance(self._registry.by_name(name), Option):
            raise KeyError(name)
        return name in self._store.options

    def is_help_requested(self):
        # nothing typed and nothing configured, or an explicit --help
        if not self._store.operands and not self._store.options and not len(self._registry):
            return True
        return HELP in self._store.options

    def as_dict(self):
        """
        Snapshot of every supplied or defaulted value, keyed by long name.

        Options map to booleans, operands are listed under their declared
        names in order (extra ones are left out), arguments without a value
        are omitted.
        """
        values = {}
        for definition in self._registry:
            if isinstance(definition, Option):
                values[definition.name] = definition.name in self._store.options
            elif isinstance(definition, Argument):
                try:
                    values[definition.name] = self._store.lookup(definition.type, definition.name)
                except KeyError:
                    continue
        for definition, value in zip(self._registry.operands, self._store.operands):
            values[definition.name] = value
        return MappingProxyType(values)

    def __rich_repr__(self):
        yield "executable", self.executable
        yield from self.as_dict().items()
        yield "operands", self.operands

    def __repr__(self):
        return "arguments(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())


__all__ = (
    "ValueStore",
    "Arguments",
)
