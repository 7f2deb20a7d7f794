r"""
cmdline argument definitions and the registry that owns them.

Overview
- Definitions
  • Option: boolean flag, e.g. --file-transfer / -t.
  • Argument: typed value (string, int or double), mandatory or carrying a
    default, e.g. --port / -p 50000.
  • Operand: positional string, bound by declaration order, e.g. database.

- Registry
  • One table of definitions in declaration order plus two indexes into it:
    long name -> position and one-letter name -> position.
  • Long names are unique across all definitions, and so are letters.
    A clash raises DuplicateDefinitionError right away.
  • restrict() makes supplying more operands than declared a parse fault.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: str matching r"[^\W\d_](-?[^\W_]+)*" (no dashes prefix, no spaces).
- letter: Unset | single printable character other than "-" and space.
- description: Unset | str, trimmed, non-empty when provided.
- Argument only
  • type: ValueType (STRING, INT, DOUBLE).
  • value_name: str shown after the names in the generated documentation.
  • default: Unset (mandatory) or a value of the declared type.

Quick example:
    >>> registry = Registry()
    >>> registry.add(Argument("port", "p", ValueType.INT, "port", "The server port.", default=50000))
    argument(name='port', letter='p', type=<ValueType.INT: 2>, value_name='port', ...)
    >>> registry.by_letter("p").default
    50000
"""
import builtins
import enum
import functools
import logging
import operator
import re

from .faults import DuplicateDefinitionError
from .utils import *

log = logging.getLogger(__name__)


class ValueType(enum.IntEnum):
    """Declared type of an Argument value."""
    STRING = 1
    INT = 2
    DOUBLE = 3

    @property
    def python(self):
        return {ValueType.STRING: str, ValueType.INT: int, ValueType.DOUBLE: float}[self]


class ArgumentType(type):
    """
    Metaclass that turns definitions into introspectable, read-only records.

    Responsibilities
    - Derive __typename__ from the class name ("Option" -> "option") for messages.
    - Expose the names listed in __introspectable__ as read-only properties
      backed by "_<name>" fields (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return "%s(%s)" % (type(self).__typename__, ", ".join(
                map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())
            ))
        self.__repr__ = __repr__

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by every definition.

    - name: required string, trimmed, matching the long-name grammar.
    - description: Unset or a non-empty string after trimming; Unset becomes "".

    Raises
    - TypeError: a field has the wrong type.
    - ValueError: a field is empty or malformed.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid long name without leading dashes")
    metadata["name"] = name

    if not isinstance(description := metadata["description"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = coalesce(description, "")


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the one-letter name of options and arguments.

    - letter: Unset (no short name) or exactly one printable character that is
      neither "-" nor a space. Unset is stored as None.
    """
    if not isinstance(letter := metadata["letter"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'letter' must be a string")
    elif isinstance(letter, str) and len(letter) != 1:
        raise ValueError(f"{cls.__typename__} 'letter' must be a single character")
    elif isinstance(letter, str) and (letter in "- " or not letter.isprintable()):
        raise ValueError(f"{cls.__typename__} 'letter' must be printable and neither a dash nor a space")
    metadata["letter"] = coalesce(letter)


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the value-bearing fields of an Argument.

    - type: ValueType member (plain strings "string"/"int"/"double" are accepted).
    - value_name: non-empty string after trimming.
    - default: Unset (mandatory argument) or a value of the declared type;
      integers are accepted for doubles and stored as float.
    """
    type = metadata["type"]
    if isinstance(type, str):
        try:
            type = ValueType[type.upper()]
        except KeyError:
            raise ValueError(f"{cls.__typename__} 'type' must be one of 'string', 'int' or 'double'") from None
    if not isinstance(type, ValueType):
        raise TypeError(f"{cls.__typename__} 'type' must be a value type")
    metadata["type"] = type

    if not isinstance(value_name := metadata["value_name"], str):
        raise TypeError(f"{cls.__typename__} 'value_name' must be a string")
    elif not (value_name := value_name.strip()):
        raise ValueError(f"{cls.__typename__} 'value_name' cannot be empty")
    metadata["value_name"] = value_name

    default = metadata["default"]
    if default is Unset:
        return
    match type:
        case ValueType.STRING if isinstance(default, str):
            pass
        case ValueType.INT if isinstance(default, int) and not isinstance(default, bool):
            pass
        case ValueType.DOUBLE if isinstance(default, int | float) and not isinstance(default, bool):
            metadata["default"] = float(default)
        case _:
            raise TypeError(f"{cls.__typename__} 'default' must be of type {type.python.__name__}")


class Option(metaclass=ArgumentType):
    """
    Boolean flag: present on the command line or not.
    """

    __introspectable__ = (
        "name",
        "letter",
        "description",
    )

    def __init__(self, name, letter=Unset, description=Unset):
        metadata = {
            "name": name,
            "letter": letter,
            "description": description,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Argument(metaclass=ArgumentType):
    """
    Named parameter carrying a typed value.

    Optional when a default is given (the value store is seeded with it),
    mandatory otherwise.
    """

    __introspectable__ = (
        "name",
        "letter",
        "type",
        "value_name",
        "description",
        "default",
    )

    def __init__(self, name, letter=Unset, type=ValueType.STRING, value_name=Unset, description=Unset, *, default=Unset):
        metadata = {
            "name": name,
            "letter": letter,
            "type": type,
            "value_name": coalesce(value_name, name if isinstance(name, str) else Unset),
            "description": description,
            "default": default,
        }
        _sanitize_metadata(builtins.type(self), metadata)
        _sanitize_named_metadata(builtins.type(self), metadata)
        _sanitize_parametric_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def optional(self):
        return self._default is not Unset


class Operand(metaclass=ArgumentType):
    """
    Positional string value; its declaration order defines its position.
    """

    __introspectable__ = (
        "name",
        "description",
    )

    letter = None

    def __init__(self, name, description=Unset):
        metadata = {
            "name": name,
            "description": description,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Registry:
    """
    Table of definitions with long-name and letter indexes.

    The table keeps declaration order; the indexes map a long name or a letter
    to a position in the table. Operands are also indexed by long name (names
    are unique across all kinds) but never by letter.
    """

    def __init__(self):
        self._definitions = []
        self._names = {}
        self._letters = {}
        self._operands = []
        self._restricted = False

    definitions = mirror("definitions")
    restricted = mirror("restricted")

    @property
    def operands(self):
        """Operand definitions in declaration order."""
        return [self._definitions[index] for index in self._operands]

    def add(self, definition, /):
        """
        Register a definition and return it.

        Raises
        - TypeError: not an Option, Argument or Operand.
        - DuplicateDefinitionError: the long name or the letter is taken.
        """
        if not isinstance(definition, Option | Argument | Operand):
            raise TypeError("Registry.add() argument must be an option, an argument or an operand")
        if definition.name in self._names:
            raise DuplicateDefinitionError("two different definitions have the same name: %r" % definition.name)
        if definition.letter is not None and definition.letter in self._letters:
            raise DuplicateDefinitionError("two different definitions have the same one-letter name: %r" % definition.letter)

        index = len(self._definitions)
        self._definitions.append(definition)
        self._names[definition.name] = index
        if definition.letter is not None:
            self._letters[definition.letter] = index
        if isinstance(definition, Operand):
            self._operands.append(index)

        log.debug("registered %r", definition)
        return definition

    def by_name(self, name, /):
        """Definition registered under the long name (KeyError when unknown)."""
        return self._definitions[self._names[name]]

    def by_letter(self, letter, /):
        """Definition registered under the one-letter name (KeyError when unknown)."""
        return self._definitions[self._letters[letter]]

    def restrict(self):
        self._restricted = True

    def __contains__(self, name):
        return name in self._names

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self):
        return len(self._definitions)


__all__ = (
    "ValueType",
    "Option",
    "Argument",
    "Operand",
    "Registry",
)
