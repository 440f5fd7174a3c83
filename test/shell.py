"""
Shell behavioral tests (line execution and fault presentation).

Scope
- Substitution, blank lines and result passthrough.
- Raised faults outside shell mode, printed faults inside it.
- Executor failures: propagated unmodified or wrapped for display.
"""
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from overture import (
    Command,
    CommandException,
    NoMatchingOverloadError,
    Param,
    Registry,
    Shell,
    UnknownCommandError,
    faults,
    identifier,
    overload,
)


class TestShell(TestCase):
    """Behavioral tests for Shell."""

    def setUp(self):
        self.error = RuntimeError("kaboom")

        @overload("Outputs the provided text.", [Param("text", variadic=True)])
        def echo(params, flags):
            return " ".join(params["text"])

        @overload("Unsets a variable.", [Param("variable", parser=identifier)])
        def unset(params, flags):
            return params["variable"]

        @overload("Always fails.")
        def boom(params, flags):
            raise self.error

        @overload("Fails with a command fault.")
        def refuse(params, flags):
            raise CommandException("refused on purpose", title="refused")

        self.registry = Registry()
        self.registry.register("echo", Command("echo", echo, aliases=("say",)))
        self.registry.register("unset", Command("unset", unset))
        self.registry.register("boom", Command("boom", boom))
        self.registry.register("refuse", Command("refuse", refuse))
        self.stderr = Console(file=io.StringIO(), width=200, color_system=None)

    def _run(self, shell, line):
        with mock.patch.object(faults, "console", self.stderr):
            return shell(line)

    def testReturnsExecutorResult(self):
        shell = Shell(self.registry, shell=False)
        self.assertEqual(shell.execute('say "hello   world"'), "hello   world")

    def testBlankLine(self):
        self.assertIsNone(Shell(self.registry, shell=False).execute("  \t"))

    def testSubstitution(self):
        shell = Shell(self.registry, lambda line: line.replace("$NAME", "overture"), shell=False)
        self.assertEqual(shell("echo hi $NAME"), "hi overture")

    def testSubstituteMustBeCallable(self):
        with self.assertRaises(TypeError):
            Shell(self.registry, "not callable")

    def testFaultsRaisedOutsideShellMode(self):
        shell = Shell(self.registry, prog="demo", shell=False)
        with self.assertRaises(UnknownCommandError) as context:
            shell("ecko hi")
        self.assertEqual(context.exception.options["prog"], "demo")
        with self.assertRaises(NoMatchingOverloadError):
            shell("unset 9lives")

    def testExecutorErrorsPropagateOutsideShellMode(self):
        shell = Shell(self.registry, shell=False)
        with self.assertRaises(RuntimeError) as context:
            shell("boom")
        self.assertIs(context.exception, self.error)

    def testExecutorFaultsPropagateOutsideShellMode(self):
        with self.assertRaises(CommandException) as context:
            Shell(self.registry, shell=False)("refuse")
        self.assertNotIn("shell", context.exception.options)

    def testUnknownCommandPrintedInShellMode(self):
        shell = Shell(self.registry, prog="demo", colorful=False)
        self.assertIsNone(self._run(shell, "ecko hi"))
        output = self.stderr.file.getvalue()
        self.assertIn("demo", output)
        self.assertIn("command 'ecko' does not exist", output)
        self.assertIn("did you mean 'echo'?", output)

    def testNoMatchPrintedInShellMode(self):
        self.assertIsNone(self._run(Shell(self.registry, colorful=False), "unset 9lives"))
        self.assertIn("try 'help unset'", self.stderr.file.getvalue())

    def testExecutorErrorWrappedInShellMode(self):
        self.assertIsNone(self._run(Shell(self.registry, fancy=True), "boom"))
        output = self.stderr.file.getvalue()
        self.assertIn("command 'boom' failed: kaboom", output)

    def testExecutorFaultPrintedInShellMode(self):
        self.assertIsNone(self._run(Shell(self.registry, colorful=False), "refuse"))
        self.assertIn("refused on purpose", self.stderr.file.getvalue())


if __name__ == "__main__":
    unittest.main()
