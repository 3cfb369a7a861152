"""
Argmap command layer: arguments that own a nested scope.

What this module provides
- Command: an argument (matched by its bare name, sorted after everything else)
  that also owns a Scope with its own help flag, validator, and help generator.
  Everything after a command token belongs to the command.

Composition
- parser.add_command("run") creates and registers a Command in the parser's
  scope; command.add_command("fast") nests one more level. Depth is unbounded.
- Registration on a command only checks the command's own collection, so a
  subcommand may reuse names already taken in its parent.

Quick start
    from argmap import ArgsParser, StringFlag, BoolFlag

    parser = ArgsParser("tool", "does things")
    run = parser.add_command("run", "runs things")
    run.add_string_flag(StringFlag("out", "o"))
    fast = run.add_subcommand("fast", "runs things faster")
    fast.add_bool_flag(BoolFlag(short="f"))

    parser.scan(["run", "-o", "file.txt"])   # {"run": {"out": ["file.txt"]}}
"""
from .arguments import Kind, Argument, _sanitize_string, _sanitize_help
from .helps import command_help
from .registry import Scope, Registrar
from .scanner import scan
from .utils import Unset


class Command(Argument, Registrar):
    """
    Command argument and parser scope at once.

    Parameters
    - name: str
      Token that invokes the command; also its key in the parsed mapping.
    - help: str | Text | None
      Description shown in the parent's help and in the command's own help.

    Attributes
    - scope: Scope
      The command's own collection, seeded with "-h"/"--help".
    - parent: Command | None
      The enclosing command, set when registered under another command.
    """
    kind = Kind.COMMAND

    __introspectable__ = (
        "name",
        "help",
    )

    def __init__(self, name=Unset, help=None):
        metadata = {
            "name": name,
            "help": help,
        }
        _sanitize_string(type(self), metadata, "name")
        _sanitize_help(type(self), metadata)
        super().__init__(**metadata)
        self.scope = Scope("shows command help and exits")
        self.parent = None
        self._generator = None

    @property
    def id(self):
        return self._name

    @property
    def path(self):
        """
        names from the outermost command down to this one.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(command.name for command in reversed(path))

    def represent(self):
        return self._name,

    def help_strings(self):
        return self._name, self._help or ""

    def __replace__(self, /, **changes):
        raise TypeError("commands cannot be replaced, register a new one instead")

    def add_command(self, name, /, help=None):
        command = super().add_command(name, help)
        command.parent = self
        return command

    add_subcommand = add_command

    def add(self, argument, /):
        argument = super().add(argument)
        if argument.kind is Kind.COMMAND:
            argument.parent = self
        return argument

    def scan(self, tokens, /):
        """
        scan the tokens that follow this command's name in its own scope.
        """
        return scan(self.scope, tokens)

    def set_help_generator(self, generator, /):
        """
        use `generator(command)` to render this command's help section.
        """
        if not callable(generator):
            raise TypeError("set_help_generator() argument must be callable")
        self._generator = generator

    def generate_help(self, *, colorful=True):
        """
        render this command's help section (a str or a rich Text).

        a custom generator set with set_help_generator() receives only the command.
        """
        if self._generator:
            return self._generator(self)
        return command_help(self, colorful=colorful)


__all__ = (
    "Command",
)
