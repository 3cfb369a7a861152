r"""
Argmap argument model: the closed set of argument kinds.

Overview
- Kind: an IntEnum whose values double as sort ranks. Smaller sorts first:
  required positionals, optional positionals, string flags, list flags,
  boolean flags, the help flag, and finally commands.
- Argument: the capability set every kind implements
  • id               → key under which the parsed value is stored
  • represent()      → tokens that identify the argument in the input
  • help_strings()   → (label, description) pair for help rendering
  • kind / rank      → variant tag and its sort rank
- Variants
  • Positional: matched by position among tokens that are not representations.
  • StringFlag: "-s"/"--name" followed by exactly `nargs` values.
  • ListFlag: "-l"/"--name" followed by zero or more values.
  • BoolFlag: "-b"/"--name", presence only.
  • HelpFlag: the implicit "-h"/"--help" of every scope.
  Commands live in argmap.commands; they are arguments that own a nested scope.

Metadata (sanitized on construction)
- Only types are checked here (TypeError on a wrong type). Whether an argument
  has a usable identity, and whether it collides with others, is decided when
  it is registered into a scope (see argmap.registry).
- Strings are trimmed; an empty string counts as not provided.
- Arguments are immutable once built. Use copy.replace(argument, **changes) to
  derive an updated copy.

Quick example:
    >>> from argmap.arguments import Positional, StringFlag, BoolFlag
    >>> StringFlag("hello", "hi", nargs=2, metavars=("first", "second")).help_strings()
    ('-hi, --hello first second', '')
    >>> Positional("surname").help_strings()
    ('[surname]', '')
"""
import functools
import operator
import re
from collections.abc import Iterable
from enum import IntEnum

from rich.text import Text

from .utils import *


class Kind(IntEnum):
    """
    argument variants; the value of each member is its sort rank.
    """
    REQUIRED_POSITIONAL = 1
    OPTIONAL_POSITIONAL = 2
    STRING_FLAG         = 3
    LIST_FLAG           = 4
    BOOL_FLAG           = 5
    HELP_FLAG           = 9
    COMMAND             = 10


class ArgumentType(type):
    """
    Metaclass that gives argument classes stable introspection.

    Responsibilities
    - Derive __typename__ from the class name ("StringFlag" -> "string-flag")
      for use in messages.
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide __repr__/__rich_repr__ built from the introspectable fields.
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

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_string(cls, metadata, name, /):
    """
    Internal: validate an optional string field and normalize it in place.

    - Unset/None → None
    - str → trimmed; an empty result becomes None
    - anything else → TypeError
    """
    if not isinstance(value := metadata[name], str | Unset | None):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    metadata[name] = coalesce(value) and value.strip() or None


def _sanitize_help(cls, metadata, /):
    """
    Internal: help text may be a plain string or a rich Text; empty becomes None.
    """
    if isinstance(help := metadata["help"], Text):
        metadata["help"] = help if help.plain.strip() else None
        return
    _sanitize_string(cls, metadata, "help")


class Argument(metaclass=ArgumentType):
    """
    Base of every argument kind.

    Subclasses set `kind` and list their constructor fields in __introspectable__;
    the fields are stored privately and published read-only.
    """
    kind = None

    def __init__(self, **metadata):
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def id(self):
        raise NotImplementedError

    @property
    def rank(self):
        return int(self.kind)

    def represent(self):
        """
        Tokens that identify this argument in the input (none by default).
        """
        return ()

    def help_strings(self):
        raise NotImplementedError

    def __replace__(self, /, **changes):
        fields = {name: getattr(self, "_" + name) for name in type(self).__introspectable__}
        return type(self)(**fields | changes)


class Positional(Argument):
    """
    Positional argument: takes the next token that is not a representation.

    Parameters
    - name: str
      Identifier of the argument (key in the parsed mapping, label in help).
    - help: str | Text | None
      Description shown in help.
    - required: bool
      Required positionals are filled before optional ones, and a parse that
      leaves one unfilled fails.
    """

    __introspectable__ = (
        "name",
        "help",
        "required",
    )

    def __init__(self, name=Unset, help=None, required=False):
        metadata = {
            "name": name,
            "help": help,
            "required": bool(required),
        }
        _sanitize_string(type(self), metadata, "name")
        _sanitize_help(type(self), metadata)
        super().__init__(**metadata)

    @property
    def kind(self):
        return Kind.REQUIRED_POSITIONAL if self._required else Kind.OPTIONAL_POSITIONAL

    @property
    def id(self):
        return self._name

    def help_strings(self):
        label = self._name if self._required else "[%s]" % self._name
        return label, self._help or ""


class Switch(Argument):
    """
    Shared identity rules of dash-prefixed arguments.

    - id: the long name when given, the short name otherwise.
    - represent(): "-short" then "--name", whichever were given.
    """

    @property
    def id(self):
        return self._name or self._short

    def represent(self):
        return tuple(
            representation for representation in (
                self._short and "-" + self._short,
                self._name and "--" + self._name,
            ) if representation
        )

    def _names(self):
        return ", ".join(self.represent())


class StringFlag(Switch):
    """
    Flag followed by exactly `nargs` value tokens.

    Parameters
    - name: str | None
      Long form, matched as "--name".
    - short: str | None
      Short form, matched as "-short".
    - nargs: int
      Number of tokens consumed after the flag. Values below 1 are raised to 1
      when the flag is registered.
    - metavars: Iterable[str]
      Value labels shown in help. At registration the list is padded with
      "value" up to `nargs`; more labels than `nargs` is an error.
    - help: str | Text | None
    """
    kind = Kind.STRING_FLAG

    __introspectable__ = (
        "name",
        "short",
        "nargs",
        "metavars",
        "help",
    )

    def __init__(self, name=Unset, short=Unset, nargs=1, metavars=(), help=None):
        metadata = {
            "name": name,
            "short": short,
            "nargs": nargs,
            "metavars": metavars,
            "help": help,
        }
        _sanitize_string(type(self), metadata, "name")
        _sanitize_string(type(self), metadata, "short")
        _sanitize_help(type(self), metadata)

        if not isinstance(nargs, int) or isinstance(nargs, bool):
            raise TypeError(f"{type(self).__typename__} 'nargs' must be an integer")

        if isinstance(metavars, str) or not isinstance(metavars, Iterable):
            raise TypeError(f"{type(self).__typename__} 'metavars' must be an iterable of strings")
        sanitized = []
        for metavar in metavars:
            if not isinstance(metavar, str):
                raise TypeError(f"{type(self).__typename__} 'metavars' must be an iterable of strings")
            sanitized.append(metavar.strip())
        metadata["metavars"] = tuple(sanitized)

        super().__init__(**metadata)

    def help_strings(self):
        return " ".join((self._names(), *self._metavars)), self._help or ""


class ListFlag(Switch):
    """
    Flag followed by any number of value tokens, up to the next known token.

    Parameters
    - name / short: as for StringFlag.
    - metavar: str
      Value label shown in help ("item" by default).
    - help: str | Text | None
    """
    kind = Kind.LIST_FLAG

    __introspectable__ = (
        "name",
        "short",
        "metavar",
        "help",
    )

    def __init__(self, name=Unset, short=Unset, metavar="item", help=None):
        metadata = {
            "name": name,
            "short": short,
            "metavar": metavar,
            "help": help,
        }
        _sanitize_string(type(self), metadata, "name")
        _sanitize_string(type(self), metadata, "short")
        _sanitize_string(type(self), metadata, "metavar")
        _sanitize_help(type(self), metadata)
        metadata["metavar"] = metadata["metavar"] or "item"
        super().__init__(**metadata)

    def help_strings(self):
        return "%s %s %s..." % (self._names(), self._metavar, self._metavar), self._help or ""


class BoolFlag(Switch):
    """
    Presence-only flag: stored as True when given, absent otherwise.
    """
    kind = Kind.BOOL_FLAG

    __introspectable__ = (
        "name",
        "short",
        "help",
    )

    def __init__(self, name=Unset, short=Unset, help=None):
        metadata = {
            "name": name,
            "short": short,
            "help": help,
        }
        _sanitize_string(type(self), metadata, "name")
        _sanitize_string(type(self), metadata, "short")
        _sanitize_help(type(self), metadata)
        super().__init__(**metadata)

    def help_strings(self):
        return self._names(), self._help or ""


class HelpFlag(Switch):
    """
    The implicit "-h"/"--help" flag. Exactly one lives in every scope.
    """
    kind = Kind.HELP_FLAG

    __introspectable__ = (
        "help",
    )

    def __init__(self, help="shows help message and exits"):
        metadata = {"help": help}
        _sanitize_help(type(self), metadata)
        super().__init__(**metadata)

    @property
    def id(self):
        return "help"

    def represent(self):
        return "-h", "--help"

    def help_strings(self):
        return self._names(), self._help or ""


__all__ = (
    "Kind",
    "Argument",
    "Positional",
    "StringFlag",
    "ListFlag",
    "BoolFlag",
    "HelpFlag",
)
