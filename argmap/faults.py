"""
Argmap faults (errors raised at registration and parsing time) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by phase: 11xxx for parsing, 21xxx for registration.
- ArgmapError: base type that carries a message plus read-only options and
  knows how to render itself through rich (header, message, hint).
- One subclass per fault kind, so callers can catch exactly what they expect.

Propagation
- Registration faults are raised at the registering call site; the argument
  collection is left untouched.
- Parsing faults abort the scan. When a fault crosses a command scope, the
  command name is prepended to its trace so messages read
  "unrecognized argument '-x' for command 'run fast'".
- Nothing here prints or exits; ArgsParser.report_error() is the only place a
  fault reaches the console.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parsing (11xxx)
      • INCORRECT_ARGUMENT_USAGE, UNRECOGNIZED_ARGUMENT, MISSING_REQUIRED_POSITIONAL
    - registration (21xxx)
      • MISSING_IDENTIFIER, DUPLICATE_IDENTIFIER, DUPLICATE_REPRESENTATION,
        TOO_MANY_VALUE_NAMES
    """
    # --- parsing errors (11xxx) ---
    INCORRECT_ARGUMENT_USAGE    = 11101
    UNRECOGNIZED_ARGUMENT       = 11102
    MISSING_REQUIRED_POSITIONAL = 11103

    # --- registration errors (21xxx) ---
    MISSING_IDENTIFIER          = 21101
    DUPLICATE_IDENTIFIER        = 21102
    DUPLICATE_REPRESENTATION    = 21103
    TOO_MANY_VALUE_NAMES        = 21104

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgmapError(Exception):
    """
    base class of every argmap fault.

    options
    - code: FaultCode
    - title: short lowercase title shown in the rendered header
    - hint: one actionable sentence
    - trace: names of the command scopes the fault crossed (outermost first)
    - any kind-specific context (token, identifier, representation, argument)
    - rendering context added by the reporter (prog, colorful, fancy)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"trace": ()} | options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def trace(self):
        return self.options["trace"]

    def within(self, name, /):
        """
        return a copy of this fault annotated with one more enclosing command scope.
        """
        return copy.replace(self, trace=(name, *self.trace))

    def __str__(self):
        if not self.trace:
            return str(self.message)
        return "%s for command %r" % (self.message, " ".join(self.trace))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", self.options.get("prog", "argmap"))
        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.code.normalize() if self.code else "", "code"),
            " | ",
            text(self.options.get("title", "error"), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingIdentifierError(ArgmapError): ...
class DuplicateIdentifierError(ArgmapError): ...
class DuplicateRepresentationError(ArgmapError): ...
class TooManyValueNamesError(ArgmapError): ...
class IncorrectArgumentUsageError(ArgmapError): ...
class UnrecognizedArgumentError(ArgmapError): ...
class MissingRequiredPositionalError(ArgmapError): ...


__all__ = (
    "FaultCode",
    "ArgmapError",
    "MissingIdentifierError",
    "DuplicateIdentifierError",
    "DuplicateRepresentationError",
    "TooManyValueNamesError",
    "IncorrectArgumentUsageError",
    "UnrecognizedArgumentError",
    "MissingRequiredPositionalError",
)
