"""
Argmap help rendering.

Contract with the argument model
- Every argument provides help_strings() -> (label, description). This module
  only lays those pairs out in two columns; it never inspects argument fields.

Layout
- The label column is as wide as the widest label, capped at 40 characters;
  longer labels simply push their description to the right.
- Sections: "arguments:" for everything that is not a command, then
  "commands:" (top level) or "subcommands:" (inside a command) followed by a
  hint on how to reach the help of a command.

Palette keys
- program-name, description-section, route, section-label
- argument-name, command-name, argument-description, hint

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, no style is applied.
"""
from collections import defaultdict

from rich.console import Group
from rich.text import Text

from .arguments import Kind


def _styler(colorful):
    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",
        "description-section": "italic #A3A3A3",
        "route": "bold #36C5F0",
        "section-label": "bold #FFFFFF",
        "argument-name": "bold #00E6FF",
        "command-name": "bold #36C5F0",
        "argument-description": "#9CA3AF",
        "hint": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _fragment(value, style):
    if isinstance(value, Text):
        return value
    return Text(str(value), style)


def rows(arguments, /):
    """
    (label, description) pairs of the given arguments, in the given order.
    """
    return [argument.help_strings() for argument in arguments]


def columns(arguments, /, *, indent=2, limit=40, colorful=True):
    """
    lay the arguments out as aligned two-column lines.

    returns a list of rich Text lines (no trailing newline).
    """
    styler = _styler(colorful)
    arguments = list(arguments)
    pairs = rows(arguments)
    width = min(max((len(label) for label, _ in pairs), default=0), limit)

    lines = []
    for argument, (label, description) in zip(arguments, pairs):
        line = Text(" " * indent)
        line.append(label, styler("command-name" if argument.kind is Kind.COMMAND else "argument-name"))
        line.append(" " * (max(width - len(label), 0) + 2))
        line.append(_fragment(description, styler("argument-description")))
        line.rstrip()
        lines.append(line)
    return lines


def _sections(arguments, children, *, colorful):
    styler = _styler(colorful)
    commands = [argument for argument in arguments if argument.kind is Kind.COMMAND]
    others = [argument for argument in arguments if argument.kind is not Kind.COMMAND]

    text = Text()
    text.append("arguments", styler("section-label")).append(":\n")
    for line in columns(others, colorful=colorful):
        text.append(line).append("\n")

    if commands:
        text.append("\n")
        text.append(children, styler("section-label")).append(":\n")
        for line in columns(commands, colorful=colorful):
            text.append(line).append("\n")
        text.append("type -h or --help after a command for more details", styler("hint")).append("\n")

    text.rstrip()
    return text


def command_help(command, /, *, colorful=True):
    """
    help section of one command: its route, its description, and its arguments.
    """
    styler = _styler(colorful)
    text = Text()
    text.append(" ".join(command.path), styler("route"))
    if command.help:
        text.append("   ").append(_fragment(command.help, styler("description-section")))
    text.append("\n\n")
    text.append(_sections(command.arguments, "subcommands", colorful=colorful))
    return text


def default_help(parser, trace=(), /):
    """
    complete help of the program.

    with an empty trace, the top-level arguments and commands are listed; with
    a trace, the program header is followed by the help of the innermost
    command of the trace. a command generator returning something other
    than text is grouped after the header.
    """
    styler = _styler(parser.colorful)
    text = Text()
    text.append(parser.name, styler("program-name")).append("\n")
    if parser.descr:
        text.append(_fragment(parser.descr, styler("description-section"))).append("\n")
    text.append("\n")

    if trace:
        rendered = trace[-1].generate_help(colorful=parser.colorful)
        if isinstance(rendered, str | Text):
            return text.append(rendered)
        return Group(text, rendered)

    return text.append(_sections(parser.arguments, "commands", colorful=parser.colorful))


__all__ = (
    "rows",
    "columns",
    "command_help",
    "default_help",
)
