"""
Parser boundary tests (prompts, help output, shell mode).

Scope
- Validate prompt normalization: sys.argv, shell-like strings, token lists.
- Validate help printing and exit status on a help request.
- Validate fault propagation, and reporting plus exit status in shell mode.

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured by redirecting stdout/stderr.
"""

from __future__ import annotations

import contextlib
import io
import sys
import unittest
from unittest import TestCase, mock

from argmap import ArgsParser, Positional, StringFlag, BoolFlag
from argmap.faults import UnrecognizedArgumentError
from argmap.helps import rows


def _parser(**options):
    parser = ArgsParser("test", "tests things", **options)
    parser.add_string_flag(StringFlag("hello", "hi", help="greets someone"))
    parser.add_bool_flag(BoolFlag("loud"))
    run = parser.add_command("run", "runs things")
    run.add_positional(Positional("target", required=True))
    return parser


class TestPrompt(TestCase):
    """What parse() accepts."""

    def testStringPromptIsShellSplit(self):
        self.assertEqual(_parser().parse("-hi 'jack smith' --loud"), {"hello": ["jack smith"], "loud": True})

    def testTokenListPrompt(self):
        self.assertEqual(_parser().parse(["run", "home"]), {"run": {"target": "home"}})

    def testDefaultPromptReadsArgv(self):
        with mock.patch.object(sys, "argv", ["test", "--hello", "jack"]):
            self.assertEqual(_parser().parse(), {"hello": ["jack"]})

    def testNonStringTokenRaises(self):
        with self.assertRaises(TypeError):
            _parser().parse(["--hello", 1])

    def testNonIterablePromptRaises(self):
        with self.assertRaises(TypeError):
            _parser().parse(42)

    def testInvalidConstructorArgumentsRaise(self):
        with self.assertRaises(TypeError):
            ArgsParser(None)
        with self.assertRaises(TypeError):
            ArgsParser("test", 3)


class TestHelpOutput(TestCase):
    """A help request prints and exits with status 0."""

    def testTopLevelHelpExitsZero(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), self.assertRaises(SystemExit) as context:
            _parser(colorful=False).parse("--help")
        self.assertEqual(context.exception.code, 0)
        output = stdout.getvalue()
        self.assertIn("tests things", output)
        self.assertIn("greets someone", output)
        self.assertIn("commands:", output)

    def testCommandHelpShowsCommandSection(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), self.assertRaises(SystemExit) as context:
            _parser(colorful=False).parse("run -h")
        self.assertEqual(context.exception.code, 0)
        output = stdout.getvalue()
        self.assertIn("run   runs things", output)
        self.assertIn("target", output)
        self.assertNotIn("greets someone", output)

    def testCustomHelpGenerator(self):
        parser = _parser(colorful=False)
        parser.set_help_generator(lambda parser, trace: "%s help at depth %d" % (parser.name, len(trace)))
        self.assertEqual(parser.generate_help(), "test help at depth 0")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), self.assertRaises(SystemExit):
            parser.parse("run --help")
        self.assertIn("test help at depth 1", stdout.getvalue())

    def testGeneratedStringsArePrintedVerbatim(self):
        parser = ArgsParser("test", colorful=False)
        parser.add_positional(Positional("surname"))
        parser.set_help_generator(lambda parser, trace: "\n".join("%s  %s" % row for row in rows(parser.arguments)))
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            parser.print_help()
        self.assertIn("[surname]", stdout.getvalue())
        self.assertIn("-h, --help  shows help message and exits", stdout.getvalue())

    def testGeneratedStringsAreNotMarkup(self):
        parser = ArgsParser("test", colorful=False)
        parser.set_help_generator(lambda parser, trace: "usage: test [/path]")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            parser.print_help()
        self.assertIn("usage: test [/path]", stdout.getvalue())

    def testHelpGeneratorMustBeCallable(self):
        with self.assertRaises(TypeError):
            _parser().set_help_generator("help")

    def testFancyHelpIsPanelled(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            _parser(colorful=False, fancy=True).print_help()
        self.assertIn("TEST HELP", stdout.getvalue())


class TestFaults(TestCase):
    """Faults propagate, or are reported in shell mode."""

    def testFaultPropagatesOutsideShell(self):
        with self.assertRaises(UnrecognizedArgumentError):
            _parser().parse("--quiet")

    def testShellModeReportsAndExitsOne(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            _parser(shell=True, colorful=False).parse("--quiet")
        self.assertEqual(context.exception.code, 1)
        output = stderr.getvalue()
        self.assertIn("unrecognized argument '--quiet'", output)
        self.assertIn("11102", output)
        self.assertIn("commands:", output)

    def testShellModeShowsHelpOfFailingCommand(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            _parser(shell=True, colorful=False).parse("run")
        self.assertEqual(context.exception.code, 1)
        output = stderr.getvalue()
        self.assertIn("for command 'run'", output)
        self.assertIn("run   runs things", output)

    def testReportingOtherExceptions(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            _parser(colorful=False).report_error(ValueError("boom"))
        self.assertEqual(context.exception.code, 1)
        self.assertIn("boom", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
