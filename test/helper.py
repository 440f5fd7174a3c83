"""
Help rendering tests (usage lines, summary, details, help command).

Renders go through a plain rich Console writing to a StringIO, so the
assertions read the text a terminal user would see.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from overture import Command, Flag, Overload, Param, Registry, UnknownCommandError
from overture.helper import details, helpcommand, summary, usage


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


def _render(renderable):
    console = _console()
    console.print(renderable)
    return console.file.getvalue()


class TestUsage(TestCase):
    """Behavioral tests for usage()."""

    def testBrackets(self):
        o = Overload("Everything.", [
            Param("variable"),
            Param("value", variadic=True),
            Param("x", optional=True),
            Param("rest", optional=True, variadic=True),
        ])
        self.assertEqual(usage("set", o).plain, "set <variable> <value...> [x] [rest...]")

    def testWithoutParams(self):
        self.assertEqual(usage("pwd", Overload("Shows the directory.")).plain, "pwd")


class TestHelpRendering(TestCase):
    """Behavioral tests for summary() and details()."""

    def setUp(self):
        self.registry = Registry()
        self.echo = self.registry.register("echo", Command(
            "echo",
            Overload("Outputs the provided text.", [Param("text", "The text to echo.", variadic=True)]),
            aliases=("say",),
        ))
        self.env = self.registry.register("env", Command(
            "env",
            Overload("Lists variables.", flags=[Flag("l", "One variable per line.")]),
            Overload("Shows one variable.", [Param("name", "The variable.", optional=True)]),
            Overload("Third form."),
            Overload("Fourth form."),
            aliases=("vars", "variables"),
        ))
        self.registry.register("secret", Command("secret", Overload("Hidden test command."), hidden=True))

    def testSummaryListsVisibleCommands(self):
        output = _render(summary(self.registry))
        self.assertIn("echo <text...> | Outputs the provided text.", output)
        self.assertIn("env | Lists variables.", output)
        self.assertNotIn("secret", output)

    def testSummaryIsSortedAndCapped(self):
        output = _render(summary(self.registry))
        self.assertLess(output.index("echo"), output.index("env"))
        self.assertIn("Third form.", output)
        self.assertNotIn("Fourth form.", output)

    def testDetails(self):
        output = _render(details("echo", self.echo))
        self.assertIn("HELP FOR: echo", output)
        self.assertIn("Alias: say", output)
        self.assertIn("--text: The text to echo.", output)
        self.assertIn("None.", output)

    def testDetailsListsEveryOverload(self):
        output = _render(details("env", self.env))
        self.assertIn("Aliases: vars, variables", output)
        self.assertIn("-l: One variable per line.", output)
        self.assertIn("--name: The variable. (OPTIONAL)", output)
        self.assertIn("Fourth form.", output)

    def testColorfulRenderKeepsText(self):
        self.assertIn("HELP FOR: echo", _render(details("echo", self.echo, colorful=True)))


class TestHelpCommand(TestCase):
    """Behavioral tests for helpcommand()."""

    def setUp(self):
        self.registry = Registry()
        self.registry.register("echo", Command(
            "echo",
            Overload("Outputs the provided text.", [Param("text", variadic=True)]),
            aliases=("say",),
        ))
        self.console = _console()
        self.help = self.registry.register("help", helpcommand(self.registry, self.console, colorful=False))

    def testShape(self):
        self.assertEqual(self.help.name, "help")
        self.assertEqual(len(self.help.overloads), 2)

    def testSummaryOverload(self):
        self.registry.dispatch("help")
        output = self.console.file.getvalue()
        self.assertIn("echo <text...>", output)
        self.assertIn("help <command> | Displays detailed help", output)

    def testDetailsOverload(self):
        self.registry.dispatch("help say")
        self.assertIn("HELP FOR: say", self.console.file.getvalue())

    def testUnknownTarget(self):
        with self.assertRaises(UnknownCommandError):
            self.registry.dispatch("help nope")


if __name__ == "__main__":
    unittest.main()
