"""
Faults module behavioral tests (taxonomy, messages, rendering, trigger).

Scope
- Every kind renders a single line prefixed by the "Error:" tag.
- Fault codes are stable and can be remapped through __main__.__codes__.
- Rich rendering (plain, colorful, fancy) and hint lines.
- trigger() prints to stderr and exits with status 1.

Conventions
- Test method names follow CamelCase per project convention.
- Rich output is captured on a colorless console for deterministic checks.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from ecp.faults import *


def render(fault, *, width=120):
    console = Console(color_system=None, force_terminal=False, width=width)
    with console.capture() as capture:
        console.print(fault)
    return capture.get()


class TestMessages(TestCase):

    def testInvalidInput(self):
        self.assertEqual(str(InvalidInputError("too few")), "Error: Invalid input: too few")

    def testInvalidCommand(self):
        fault = InvalidCommandError("Command not found: foo", input="foo")
        self.assertEqual(str(fault), "Error: Invalid command: Command not found: foo")
        self.assertEqual(fault.input, "foo")

    def testInvalidFlag(self):
        self.assertEqual(str(InvalidFlagError("Flags not found")), "Error: Invalid flag: Flags not found")

    def testInputOutputError(self):
        error = OSError("broken pipe")
        fault = InputOutputError("broken pipe", error=error)
        self.assertEqual(str(fault), "Error: IO error: broken pipe")
        self.assertIs(fault.error, error)

    def testUnknownWithoutMessage(self):
        self.assertEqual(str(UnknownError()), "Error: Unknown error")

    def testMessagesAreSingleLine(self):
        for fault in (
            InvalidInputError("a"),
            InvalidCommandError("b", input="b"),
            InvalidFlagError("c"),
            InputOutputError("d"),
            UnknownError(),
        ):
            with self.subTest(fault=type(fault).__name__):
                self.assertNotIn("\n", str(fault))
                self.assertTrue(str(fault).startswith("Error: "))

    def testTaxonomyIsClosedUnderParseError(self):
        for kind in (InvalidInputError, InvalidCommandError, InvalidFlagError, InputOutputError, UnknownError):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, ParseError))

    def testOptionsAreReadOnly(self):
        fault = InvalidFlagError("Flags not found", hint="pass --release")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "other"  # type: ignore[index]


class TestFaultCode(TestCase):

    def testCodesPerKind(self):
        self.assertIs(InvalidInputError.code, FaultCode.INVALID_INPUT)
        self.assertIs(InvalidCommandError.code, FaultCode.INVALID_COMMAND)
        self.assertIs(InvalidFlagError.code, FaultCode.INVALID_FLAG)
        self.assertIs(InputOutputError.code, FaultCode.IO_ERROR)
        self.assertIs(UnknownError.code, FaultCode.UNKNOWN)

    def testCodesAreDistinct(self):
        self.assertEqual(len(set(FaultCode)), 5)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.INVALID_FLAG.normalize(), "11112")

    def testNormalizeHonorsHostMapping(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.INVALID_FLAG: "E-FLAG"}, create=True):
            self.assertEqual(FaultCode.INVALID_FLAG.normalize(), "E-FLAG")
            self.assertEqual(FaultCode.INVALID_INPUT.normalize(), "11100")


class TestRendering(TestCase):

    def testPlainRender(self):
        output = render(InvalidCommandError(
            "Command not found: foo",
            input="foo",
            prog="rust",
            colorful=False,
            hint="expected one of: cargo",
        ))
        self.assertIn("[ rust — 11101 | Invalid Command ]", output)
        self.assertIn("Error: Invalid command: Command not found: foo", output)
        self.assertIn("→ expected one of: cargo", output)

    def testRenderWithoutHint(self):
        output = render(InvalidFlagError("Flags not found", prog="rust"))
        self.assertNotIn("→", output)
        self.assertIn("Error: Invalid flag: Flags not found", output)

    def testFancyRenderUsesPanel(self):
        output = render(InvalidFlagError("Flags not found", prog="rust", fancy=True))
        self.assertIn("╭", output)
        self.assertIn("Error: Invalid flag: Flags not found", output)

    def testHostProgramName(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__prog__", "cargo-cli", create=True):
            output = render(InvalidFlagError("Flags not found", prog="rust"))
        self.assertIn("[ cargo-cli — ", output)

    def testReplaceMergesOptions(self):
        fault = InvalidCommandError("Command not found: foo", input="foo")
        replaced = fault.__replace__(prog="rust")
        self.assertIsInstance(replaced, InvalidCommandError)
        self.assertEqual(replaced.options["prog"], "rust")
        self.assertEqual(replaced.input, "foo")
        self.assertNotIn("prog", fault.options)


class TestTrigger(TestCase):

    def testTriggerPrintsAndExits(self):
        buffer = io.StringIO()
        with mock.patch("ecp.faults.console", Console(file=buffer, color_system=None, width=120)):
            with self.assertRaises(SystemExit) as context:
                trigger(InvalidFlagError("Flags not found"), prog="rust", colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("Error: Invalid flag: Flags not found", buffer.getvalue())
        self.assertIn("rust", buffer.getvalue())

    def testTriggerRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
