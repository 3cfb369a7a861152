"""
Argmap registry: registration validator, ordering policy, and scopes.

What this module provides
- check_identifiers(arguments, candidate): uniqueness of ids and representations
  within one collection. Raises, never mutates.
- sort_arguments(arguments): the canonical order the scanner relies on. A stable
  sort by rank, so arguments of the same kind keep their registration order.
- Scope: the append-only argument collection of the top-level parser or of one
  command. Seeded with a HelpFlag; every entry point validates before appending.
- Registrar: the registration API shared by ArgsParser and Command, forwarding
  to the Scope they own.

Uniqueness is per scope: a command's arguments may reuse the ids and
representations of its parent's arguments.
"""
import copy

from .arguments import Kind, Argument, Positional, StringFlag, ListFlag, BoolFlag, HelpFlag
from .faults import *


def check_identifiers(arguments, candidate, /):
    """
    validate a candidate against an existing collection.

    raises
    - DuplicateIdentifierError: candidate.id equals the id of an existing argument.
    - DuplicateRepresentationError: one of the candidate's representations is
      already a representation of an existing argument.

    returns None on success; the collection is never touched.
    """
    representations = candidate.represent()
    for argument in arguments:
        if argument.id == candidate.id:
            raise DuplicateIdentifierError(
                "identifier %r already exists" % candidate.id,
                title="duplicate identifier",
                code=FaultCode.DUPLICATE_IDENTIFIER,
                hint="choose a different name for the new argument",
                identifier=candidate.id,
                argument=candidate,
            )
        for representation in representations:
            if representation in argument.represent():
                raise DuplicateRepresentationError(
                    "representation %r already exists" % representation,
                    title="duplicate representation",
                    code=FaultCode.DUPLICATE_REPRESENTATION,
                    hint="choose a different name or short form for the new argument",
                    representation=representation,
                    argument=candidate,
                )


def sort_arguments(arguments, /):
    """
    return a new list ordered by rank; ties keep their original order.

    order of relevance
        1. Positional (required)
        2. Positional (optional)
        3. StringFlag
        4. ListFlag
        5. BoolFlag
        6. HelpFlag
        7. Command
    """
    return sorted(arguments, key=lambda argument: argument.rank)


def _missing_identifier(kind, hint):
    return MissingIdentifierError(
        "at least one identifier must be specified for the %s" % kind,
        title="missing identifier",
        code=FaultCode.MISSING_IDENTIFIER,
        hint=hint,
    )


class Scope:
    """
    append-only argument collection guarded by check_identifiers().

    a failed registration raises and leaves the collection unchanged.
    """

    def __init__(self, help="shows help message and exits"):
        self._arguments = [HelpFlag(help)]

    def __len__(self):
        return len(self._arguments)

    def __iter__(self):
        return iter(sort_arguments(self._arguments))

    @property
    def arguments(self):
        """
        sorted copy of the collection (safe to keep or mutate).
        """
        return sort_arguments(self._arguments)

    def sort(self):
        self._arguments.sort(key=lambda argument: argument.rank)

    def _append(self, argument):
        check_identifiers(self._arguments, argument)
        self._arguments.append(argument)
        return argument

    def add_positional(self, positional, /):
        if not isinstance(positional, Positional):
            raise TypeError("add_positional() argument must be a positional")
        if not positional.name:
            raise _missing_identifier("positional", "give the positional a name")
        return self._append(positional)

    def add_string_flag(self, flag, /):
        if not isinstance(flag, StringFlag):
            raise TypeError("add_string_flag() argument must be a string-flag")
        if not flag.id:
            raise _missing_identifier("string-flag", "give the flag a name, a short form, or both")

        nargs = max(flag.nargs, 1)
        metavars = flag.metavars
        if len(metavars) > nargs:
            raise TooManyValueNamesError(
                "too many value names specified (expected %d, got %d)" % (nargs, len(metavars)),
                title="too many value names",
                code=FaultCode.TOO_MANY_VALUE_NAMES,
                hint="pass at most %d value names or raise nargs" % nargs,
                argument=flag,
                expected=nargs,
                got=len(metavars),
            )
        metavars += ("value",) * (nargs - len(metavars))

        if nargs != flag.nargs or metavars != flag.metavars:
            flag = copy.replace(flag, nargs=nargs, metavars=metavars)
        return self._append(flag)

    def add_list_flag(self, flag, /):
        if not isinstance(flag, ListFlag):
            raise TypeError("add_list_flag() argument must be a list-flag")
        if not flag.id:
            raise _missing_identifier("list-flag", "give the flag a name, a short form, or both")
        return self._append(flag)

    def add_bool_flag(self, flag, /):
        if not isinstance(flag, BoolFlag):
            raise TypeError("add_bool_flag() argument must be a bool-flag")
        if not flag.id:
            raise _missing_identifier("bool-flag", "give the flag a name, a short form, or both")
        return self._append(flag)

    def add_command(self, command, /):
        if not isinstance(command, Argument) or command.kind is not Kind.COMMAND:
            raise TypeError("add_command() argument must be a command")
        if not command.name:
            raise _missing_identifier("command", "give the command a name")
        return self._append(command)

    def add(self, argument, /):
        """
        register any argument, dispatching on its kind.
        """
        if not isinstance(argument, Argument):
            raise TypeError("add() argument must be an argument")

        match argument.kind:
            case Kind.REQUIRED_POSITIONAL | Kind.OPTIONAL_POSITIONAL:
                return self.add_positional(argument)
            case Kind.STRING_FLAG:
                return self.add_string_flag(argument)
            case Kind.LIST_FLAG:
                return self.add_list_flag(argument)
            case Kind.BOOL_FLAG:
                return self.add_bool_flag(argument)
            case Kind.COMMAND:
                return self.add_command(argument)
            case _:
                raise TypeError("add() cannot register a %s" % type(argument).__typename__)

    def set_help_message(self, message, /):
        """
        replace the text of the scope's help flag.
        """
        for index, argument in enumerate(self._arguments):
            if argument.kind is Kind.HELP_FLAG:
                self._arguments[index] = copy.replace(argument, help=message)
                return


class Registrar:
    """
    registration api shared by the top-level parser and commands.

    owners provide `self.scope` (a Scope); every call is forwarded to it.
    """

    @property
    def arguments(self):
        return self.scope.arguments

    def sort(self):
        self.scope.sort()

    def add(self, argument, /):
        return self.scope.add(argument)

    def add_positional(self, positional, /):
        return self.scope.add_positional(positional)

    def add_string_flag(self, flag, /):
        return self.scope.add_string_flag(flag)

    def add_list_flag(self, flag, /):
        return self.scope.add_list_flag(flag)

    def add_bool_flag(self, flag, /):
        return self.scope.add_bool_flag(flag)

    def add_command(self, name, /, help=None):
        """
        create a command named `name`, register it in this scope, and return it.
        """
        from .commands import Command

        return self.scope.add_command(Command(name, help))

    def set_help_message(self, message, /):
        self.scope.set_help_message(message)


__all__ = (
    "check_identifiers",
    "sort_arguments",
    "Scope",
    "Registrar",
)
