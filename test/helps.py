"""
Help rendering tests (columns, sections, per-command help).

Scope
- Validate two-column alignment and the label width cap.
- Validate the top-level and per-command sections.
- Validate custom per-command generators and help flag messages.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is checked on plain text (colorful=False).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console, Group
from rich.panel import Panel

from argmap import ArgsParser, Positional, StringFlag, ListFlag, BoolFlag
from argmap.helps import rows, columns


class TestColumns(TestCase):
    """Label/description layout."""

    def testRowsArePairs(self):
        self.assertEqual(
            rows([BoolFlag("loud", help="shouts"), Positional("name", required=True)]),
            [("--loud", "shouts"), ("name", "")],
        )

    def testDescriptionsAreAligned(self):
        parser = ArgsParser("test")
        parser.add_string_flag(StringFlag("hello", "hi"))
        parser.add_bool_flag(BoolFlag("loud", help="shouts"))
        lines = [line.plain for line in columns(parser.arguments, colorful=False)]
        self.assertEqual(lines, [
            "  -hi, --hello value",
            "  --loud" + " " * 14 + "shouts",
            "  -h, --help" + " " * 10 + "shows help message and exits",
        ])

    def testLabelWidthIsCapped(self):
        long = "x" * 50
        lines = [line.plain for line in columns([BoolFlag(long, help="long"), BoolFlag("a", help="short")], colorful=False)]
        self.assertEqual(lines[0], "  --" + long + "  long")
        self.assertEqual(lines[1], "  --a" + " " * 39 + "short")

    def testCustomIndent(self):
        line, = columns([BoolFlag("loud", help="shouts")], indent=4, colorful=False)
        self.assertEqual(line.plain, "    --loud  shouts")


class TestSections(TestCase):
    """Program and command help layouts."""

    def setUp(self):
        self.parser = ArgsParser("test", "tests things", colorful=False)
        self.parser.add_list_flag(ListFlag("files", "f", help="input files"))
        self.run = self.parser.add_command("run", "runs things")
        self.run.add_positional(Positional("target"))
        self.fast = self.run.add_subcommand("fast", "runs faster")

    def testProgramHelp(self):
        text = self.parser.generate_help().plain
        self.assertTrue(text.startswith("test\ntests things\n\narguments:\n"))
        self.assertIn("-f, --files item item...", text)
        self.assertIn("commands:\n  run", text)
        self.assertTrue(text.endswith("type -h or --help after a command for more details"))

    def testProgramHelpWithoutCommands(self):
        text = ArgsParser("bare", colorful=False).generate_help().plain
        self.assertEqual(text, "bare\n\narguments:\n  -h, --help  shows help message and exits")

    def testCommandHelp(self):
        text = self.run.generate_help(colorful=False).plain
        self.assertTrue(text.startswith("run   runs things\n\narguments:\n"))
        self.assertIn("[target]", text)
        self.assertIn("shows command help and exits", text)
        self.assertIn("subcommands:\n  fast", text)

    def testSubcommandHelpShowsRoute(self):
        self.assertTrue(self.fast.generate_help(colorful=False).plain.startswith("run fast   runs faster\n\n"))

    def testProgramHelpWithTrace(self):
        text = self.parser.generate_help((self.run, self.fast)).plain
        self.assertTrue(text.startswith("test\ntests things\n\nrun fast   runs faster"))
        self.assertNotIn("input files", text)

    def testCustomCommandGenerator(self):
        self.run.set_help_generator(lambda command: "only %s" % command.name)
        self.assertEqual(self.run.generate_help(), "only run")
        self.assertTrue(self.parser.generate_help((self.run,)).plain.endswith("only run"))

    def testCommandGeneratorReturningRenderable(self):
        self.run.set_help_generator(lambda command: Panel("%s help" % command.name))
        rendered = self.parser.generate_help((self.run,))
        self.assertIsInstance(rendered, Group)
        stdout = io.StringIO()
        Console(file=stdout, width=80, no_color=True).print(rendered)
        self.assertIn("tests things", stdout.getvalue())
        self.assertIn("run help", stdout.getvalue())

    def testCommandHelpMessage(self):
        self.run.set_help_message("explains run")
        self.assertIn("-h, --help  explains run", self.run.generate_help(colorful=False).plain)


if __name__ == "__main__":
    unittest.main()
