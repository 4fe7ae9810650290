"""
Help renderer behavioral tests (layout, labels and styling).

Scope
- Validate the generated listing line by line: header, author, usage, nested
  arguments sharing one help column, and the trailing help entry.
- Validate custom help text, custom usage and optional-values labels.
- Validate that colors only add styling and never change the plain text.

Conventions
- Test method names follow CamelCase per project convention.
- Parsers are built with colorful=False unless styling is under test.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from hashparse import Parser
from hashparse.helper import render_help, print_help, HELP_TEXT


def calculator(**options):
    parser = Parser("calc", author="Example", description="tiny calculator", **options)
    parser.add("--say", 1, "Repeat something")
    expand = parser.add(["-x", "--expand"], 0, "Expand")
    string = parser.add_subcommand(expand, "--string", 1, "String")
    parser.add_subcommand(string, "--super-test", 0, "Deep")
    return parser


def row(indent, label, help, column=27):
    return "    " + indent + label.ljust(column - len(indent)) + help


class TestHelper(TestCase):
    """Behavioral tests for render_help() and print_help()."""

    def testLayout(self):
        expected = "\n".join([
            "calc: tiny calculator",
            "Author: Example",
            "Usage:",
            "    $ calc -[-command] [value/s...]",
            "Arguments:",
            row("", "--say [1 values]", "Repeat something"),
            row("", "-x | --expand", "Expand"),
            row("    ", "--string [1 values]", "String"),
            row("        ", "--super-test", "Deep"),
            row("", "-h, --help", HELP_TEXT),
        ])
        self.assertEqual(render_help(calculator(colorful=False)).plain, expected)

    def testMinimalParser(self):
        parser = Parser("tool", colorful=False)
        expected = "\n".join([
            "tool",
            "Usage:",
            "    $ tool -[-command] [value/s...]",
            "Arguments:",
            "    -h, --help    " + HELP_TEXT,
        ])
        self.assertEqual(render_help(parser).plain, expected)

    def testOptionalValuesAndEmptyHelp(self):
        parser = Parser("tool", usage="$ tool [options]", colorful=False)
        parser.add("--pair", 2, optional=True)
        lines = render_help(parser).plain.splitlines()
        self.assertEqual(lines[2], "    $ tool [options]")
        self.assertEqual(lines[4], "    --pair [2 optional values]")

    def testCustomHelpReplacesListing(self):
        parser = Parser("tool", help="usage: tool [-v]")
        parser.add("-v", 0, "Verbose")
        self.assertEqual(render_help(parser).plain, "usage: tool [-v]")

    def testColorsDoNotChangeText(self):
        colorful = render_help(calculator())
        plain = render_help(calculator(colorful=False))
        self.assertEqual(colorful.plain, plain.plain)
        self.assertTrue(colorful.spans)

    def testPrintHelp(self):
        buffer = io.StringIO()
        parser = calculator(colorful=False)
        print_help(parser, console=Console(file=buffer, width=200, color_system=None))
        self.assertEqual(buffer.getvalue(), render_help(parser).plain + "\n")


if __name__ == "__main__":
    unittest.main()
