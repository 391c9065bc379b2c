"""
Help screen tests.

Scope
- Description headline and one row per declaration in registration order.
- FLAG badges and "default = ..." lines.
- Palette overrides through __main__.__styles__ and colorless output.
- Fancy panel titled with the program name.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console, Group
from rich.panel import Panel

from argtable import DeclarationTable, Parser, render
from argtable.helper import PALETTE

main = sys.modules["__main__"]


def capture(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def example():
    return (
        DeclarationTable("adds numbers")
        .add_valued("add", "a", "add the given value", int)
        .add_flag("test", "t", "test flag", False)
        .add_valued_with_default("count", "c", "how many", 10, int)
        .add_valued_with_default("name", "n", "who", "anonymous", str)
    )


class TestRender(TestCase):
    """Plain help screen content."""

    def setUp(self):
        self.output = capture(render(example(), colorful=False))
        self.lines = self.output.splitlines()

    def testDescriptionFirst(self):
        self.assertEqual(self.lines[0].rstrip(), "adds numbers")

    def testRowsInRegistrationOrder(self):
        positions = [self.output.index(id + " :") for id in ("help", "add", "test", "count", "name")]
        self.assertEqual(positions, sorted(positions))

    def testNamesListed(self):
        for names in ("--help, -h", "--add, -a", "--test, -t", "--count, -c", "--name, -n"):
            with self.subTest(names=names):
                self.assertIn(names, self.output)

    def testFlagBadges(self):
        self.assertEqual(self.output.count("FLAG"), 2)

    def testDefaults(self):
        self.assertIn("default = false", self.output)
        self.assertIn("default = 10", self.output)
        self.assertIn("default = 'anonymous'", self.output)
        self.assertEqual(self.output.count("default ="), 3)

    def testDescriptionsListed(self):
        for descr in ("display help information", "add the given value", "test flag", "how many", "who"):
            with self.subTest(descr=descr):
                self.assertIn(descr, self.output)


class TestStyles(TestCase):
    """Palette handling."""

    def testPaletteApplied(self):
        group = render(example())
        self.assertIsInstance(group, Group)
        self.assertEqual(str(group.renderables[0].style), PALETTE["description"])

    def testColorlessOutputHasNoStyle(self):
        group = render(example(), colorful=False)
        self.assertEqual(str(group.renderables[0].style), "")

    def testHostOverride(self):
        with mock.patch.object(main, "__styles__", {"description": "bold red"}, create=True):
            group = render(example())
        self.assertEqual(str(group.renderables[0].style), "bold red")


class TestFancy(TestCase):
    """Panel output."""

    def testPanelTitledWithProg(self):
        panel = render(example(), prog="calc", fancy=True, colorful=False)
        self.assertIsInstance(panel, Panel)
        output = capture(panel)
        self.assertIn("calc", output)
        self.assertIn("adds numbers", output)

    def testPanelTitleFromParser(self):
        parser = Parser("adds numbers", prog="calc")
        output = capture(render(parser, fancy=True, colorful=False))
        self.assertIn("calc", output.splitlines()[0])

    def testPrintHelp(self):
        parser = Parser("adds numbers", prog="calc", colorful=False)
        stdout = io.StringIO()
        with mock.patch.object(sys, "stdout", stdout):
            parser.print_help()
        self.assertIn("--help, -h", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
