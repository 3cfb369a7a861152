"""
Argmap token scanner: one left-to-right pass from tokens to a result mapping.

phases
- setup
  • sort the scope (required positionals, optional positionals, string flags,
    list flags, bool flags, help, commands).
  • build the representation table (token → argument) from every argument
    that is not a positional, and the queue of positional slots.
- loop
  • a token found in the table is dispatched on the argument kind:
      – string flag: takes exactly `nargs` following tokens, whatever they are.
      – list flag:   takes following tokens up to the next known token.
      – bool flag:   stores True.
      – help flag:   stops everything and returns a HelpRequest.
      – command:     scans the rest of the tokens in the command's scope; the
                     command owns every remaining token.
  • any other token fills the next positional slot.
- post-scan
  • the first unfilled required slot is a MissingRequiredPositionalError.

result shapes
- positional  → str
- string flag → list[str] of length nargs
- list flag   → list[str] (possibly empty)
- bool flag   → True (absent when not given, never False)
- command     → nested mapping of the same shape

the scanner never prints, logs, or exits; faults are raised and the help
request is returned, both for the boundary (ArgsParser.parse) to handle.
"""
from collections import deque

from .arguments import Kind
from .faults import *
from .registry import sort_arguments


class HelpRequest:
    """
    terminal, non-error outcome of a scan that met "-h" or "--help".

    trace holds the commands traversed before the help flag, outermost first;
    it is empty when help was requested at the top level.
    """
    __slots__ = ("trace",)

    def __init__(self, trace=()):
        self.trace = tuple(trace)

    @property
    def scope(self):
        """
        the innermost command the help belongs to, or None for the top level.
        """
        return self.trace[-1] if self.trace else None

    def within(self, command, /):
        return type(self)((command, *self.trace))

    def __eq__(self, other):
        if not isinstance(other, HelpRequest):
            return NotImplemented
        return self.trace == other.trace

    def __hash__(self):
        return hash((HelpRequest, self.trace))

    def __repr__(self):
        return "HelpRequest(trace=%r)" % (tuple(command.name for command in self.trace),)


def scan(arguments, tokens, /):
    """
    parse `tokens` against the arguments of one scope.

    parameters
    - arguments: Iterable[Argument]
      the scope's collection; it is sorted here, so registration order only
      matters between arguments of the same kind.
    - tokens: Sequence[str]
      everything after the program name (or after the command token).

    returns
    - dict[str, ...] on success, or a HelpRequest.

    raises
    - IncorrectArgumentUsageError, UnrecognizedArgumentError,
      MissingRequiredPositionalError; faults raised inside a command come back
      with that command's name prepended to their trace.
    """
    tokens = list(tokens)
    namespace = {}

    table = {}
    slots = deque()
    for argument in sort_arguments(arguments):
        if argument.kind <= Kind.OPTIONAL_POSITIONAL:
            slots.append(argument)
            continue
        table.update(dict.fromkeys(argument.represent(), argument))

    index = 0
    while index < len(tokens):
        token = tokens[index]

        try:
            argument = table[token]
        except KeyError:
            try:
                slot = slots.popleft()
            except IndexError:
                raise UnrecognizedArgumentError(
                    "unrecognized argument %r" % token,
                    title="unrecognized argument",
                    code=FaultCode.UNRECOGNIZED_ARGUMENT,
                    hint="remove this extra value or check the expected usage with --help",
                    token=token,
                    index=index,
                ) from None
            namespace[slot.id] = token
            index += 1
            continue

        match argument.kind:
            case Kind.STRING_FLAG:
                if index + argument.nargs >= len(tokens):
                    raise IncorrectArgumentUsageError(
                        "incorrect arguments number for flag %r" % token,
                        title="incorrect argument usage",
                        code=FaultCode.INCORRECT_ARGUMENT_USAGE,
                        hint="%s expects %d value%s" % (token, argument.nargs, "s" * (argument.nargs > 1)),
                        token=token,
                        index=index,
                        argument=argument,
                        expected=argument.nargs,
                        got=len(tokens) - index - 1,
                    )
                namespace[argument.id] = tokens[index + 1:index + 1 + argument.nargs]
                index += 1 + argument.nargs
            case Kind.LIST_FLAG:
                index += 1
                values = []
                while index < len(tokens) and tokens[index] not in table:
                    values.append(tokens[index])
                    index += 1
                namespace[argument.id] = values
            case Kind.BOOL_FLAG:
                namespace[argument.id] = True
                index += 1
            case Kind.HELP_FLAG:
                return HelpRequest()
            case Kind.COMMAND:
                try:
                    result = argument.scan(tokens[index + 1:])
                except ArgmapError as error:
                    raise error.within(argument.name) from None
                if isinstance(result, HelpRequest):
                    return result.within(argument)
                namespace[argument.id] = result
                break
            case _:
                raise RuntimeError("unexpected argument")

    for slot in slots:
        if slot.required:
            raise MissingRequiredPositionalError(
                "missing required positional argument %r" % slot.id,
                title="missing required positional",
                code=FaultCode.MISSING_REQUIRED_POSITIONAL,
                hint="add a value for %r; positionals are filled in the order shown by --help" % slot.id,
                identifier=slot.id,
                argument=slot,
            )

    return namespace


__all__ = (
    "HelpRequest",
    "scan",
)
