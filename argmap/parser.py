"""
Argmap parser: the top-level scope and the boundary around the scanner.

What this module provides
- ArgsParser: owns the top-level Scope (seeded with "-h"/"--help"), the help
  generator, and the runtime options. Two ways to parse:
  • scan(tokens)   → pure: a mapping, a HelpRequest, or a raised fault.
  • parse(prompt)  → boundary: reads sys.argv when no prompt is given, prints
                     help and exits on a help request, and in shell mode
                     reports faults and exits.

Runtime options
- shell: report faults on the console and exit(1) instead of raising.
- colorful: style help and faults with the palette (see argmap.helps).
- fancy: wrap help and faults in a rich Panel.

Quick start
    from argmap import ArgsParser, Positional, StringFlag, BoolFlag

    parser = ArgsParser("greeter", "says hello")
    parser.add_positional(Positional("lang", required=True))
    parser.add_string_flag(StringFlag("hello", "hi", metavars=["name"]))
    parser.add_bool_flag(BoolFlag("loud"))

    namespace = parser.parse()          # sys.argv[1:]
    namespace = parser.parse("en -hi jack --loud")
"""
import copy
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .arguments import Kind
from .faults import ArgmapError
from .helps import default_help
from .registry import Scope, Registrar
from .scanner import HelpRequest, scan
from .utils import Unset


def _tokenize(prompt):
    """
    normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:]
    - str: shell-like string split with shlex.split
    - Iterable[str]: used as-is (every item must be a string)
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class ArgsParser(Registrar):
    """
    Top-level parser.

    Parameters
    - name: str
      Program name shown in help and fault headers.
    - descr: str | Text | None
      One-line description shown under the name in help.
    - shell: bool
      When True, parse() reports faults and exits instead of raising.
    - colorful: bool
      Apply the palette to help and faults.
    - fancy: bool
      Wrap help and faults in a panel.
    """

    def __init__(self, name, descr=None, *, shell=False, colorful=True, fancy=False):
        if not isinstance(name, str):
            raise TypeError("args-parser 'name' must be a string")
        if not isinstance(descr, str | Text | None):
            raise TypeError("args-parser 'descr' must be a string")
        self.name = name
        self.descr = descr
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.scope = Scope("shows help message and exits")
        self._generator = default_help

    def __repr__(self):
        return "args-parser(name=%r, descr=%r)" % (self.name, self.descr)

    def scan(self, tokens, /):
        """
        parse a token sequence without side effects.

        returns a mapping, or a HelpRequest when "-h"/"--help" was met; parsing
        faults are raised.
        """
        return scan(self.scope, tokens)

    def parse(self, prompt=Unset, /):
        """
        parse a prompt and handle help and faults at the boundary.

        - a help request prints the help of the innermost command traversed and
          exits with status 0.
        - a fault is raised, or, in shell mode, reported and followed by exit(1).
        """
        tokens = _tokenize(prompt)
        try:
            result = self.scan(tokens)
        except ArgmapError as error:
            if not self.shell:
                raise
            self.report_error(error)

        if isinstance(result, HelpRequest):
            self.print_help(result.trace)
            sys.exit(0)
        return result

    def set_help_generator(self, generator, /):
        """
        use `generator(parser, trace)` to build the help text.

        trace is the tuple of commands traversed before the help flag (empty at
        the top level); the generator returns a str or a rich renderable.
        """
        if not callable(generator):
            raise TypeError("set_help_generator() argument must be callable")
        self._generator = generator

    def generate_help(self, trace=(), /):
        return self._generator(self, tuple(trace))

    def print_help(self, trace=(), /, *, stderr=False):
        renderable = self.generate_help(trace)
        if isinstance(renderable, str):
            renderable = Text(renderable)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[ ", f"{self.name} help".upper(), " ]"),
                title_align="left",
            )
        Console(stderr=stderr, no_color=not self.colorful).print(renderable)

    def report_error(self, error, /):
        """
        print a fault (or any exception) and the relevant help to stderr, then exit(1).

        faults raised inside commands show the help of the command they came from.
        """
        trace = ()
        if isinstance(error, ArgmapError):
            trace = self._resolve(error.trace)
            renderable = copy.replace(error, prog=self.name, colorful=self.colorful, fancy=self.fancy)
        else:
            renderable = Text(str(error))

        Console(stderr=True, no_color=not self.colorful).print(renderable)
        self.print_help(trace, stderr=True)
        sys.exit(1)

    def _resolve(self, names):
        """
        map a trace of command names back to the commands, outermost first.
        """
        trace = []
        scope = self.scope
        for name in names:
            for argument in scope:
                if argument.kind is Kind.COMMAND and argument.name == name:
                    trace.append(argument)
                    scope = argument.scope
                    break
            else:
                break
        return tuple(trace)


__all__ = (
    "ArgsParser",
)
