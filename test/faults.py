"""
Fault tests.

Scope
- Every error kind carries its code, title and hint, overridable per instance.
- __replace__ keeps the message and merges options.
- trigger(): raise outside shell mode, print and exit inside it.
- Rich rendering honors __prog__ and __codes__ from __main__.
"""
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argconvert import faults
from argconvert.faults import *


class TestFaultCodes(TestCase):

    def testCodesAreUnique(self):
        self.assertEqual(len(set(FaultCode)), len(FaultCode.__members__))

    def testKindsCarryCodes(self):
        for kind, code in (
                (ConfigurationError, FaultCode.CONFIGURATION),
                (RegistrationError, FaultCode.REGISTRATION),
                (AccessError, FaultCode.ACCESS),
                (ValueAccessError, FaultCode.VALUE_ACCESS),
                (ArgumentParsingError, FaultCode.ARGUMENT_PARSING),
                (HelpStringError, FaultCode.HELP_STRING),
        ):
            error = kind("message")
            self.assertIsInstance(error, ArgumentError)
            self.assertIs(error.code, code)

    def testNormalizeDefaultsToNumber(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {}, create=True):
            self.assertEqual(FaultCode.ACCESS.normalize(), "21201")

    def testNormalizeUsesHostLabels(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.ACCESS: "E-ACCESS"}, create=True):
            self.assertEqual(FaultCode.ACCESS.normalize(), "E-ACCESS")
            self.assertEqual(FaultCode.REGISTRATION.normalize(), "21102")


class TestArgumentError(TestCase):

    def testMessageAndOptions(self):
        error = ArgumentParsingError("bad token", hint="try again", token="--x")
        self.assertEqual(str(error), "bad token")
        self.assertEqual(error.hint, "try again")
        self.assertEqual(error.options["token"], "--x")
        with self.assertRaises(TypeError):
            error.options["token"] = "--y"

    def testDefaultHint(self):
        self.assertEqual(RegistrationError("taken").hint, RegistrationError.__hint__)
        self.assertEqual(AccessError("unknown").hint, "")

    def testReplace(self):
        error = AccessError("unknown", hint="first")
        replaced = error.__replace__(hint="second", shell=True)
        self.assertIsInstance(replaced, AccessError)
        self.assertEqual(replaced.message, "unknown")
        self.assertEqual(replaced.hint, "second")
        self.assertTrue(replaced.options["shell"])
        self.assertEqual(error.hint, "first")

    def testEmptyMessage(self):
        self.assertEqual(str(ArgumentError()), "")


class TestTrigger(TestCase):

    def setUp(self):
        self.console = Console(color_system=None, force_terminal=False, width=120)
        patcher = mock.patch.object(faults, "console", self.console)
        patcher.start()
        self.addCleanup(patcher.stop)
        patcher = mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testRaisesOutsideShell(self):
        with self.assertRaises(ValueAccessError) as context:
            trigger(ValueAccessError("no value"), hint="added")
        self.assertEqual(context.exception.hint, "added")

    def testShellPrintsAndExits(self):
        with self.console.capture() as capture:
            with self.assertRaises(SystemExit) as context:
                trigger(ArgumentParsingError("invalid argument: '--x'", hint="did you mean '--y'?"), shell=True)
        self.assertEqual(context.exception.code, 1)
        output = capture.get()
        self.assertIn("[ tool — 21301 | Invalid Input ]", output)
        self.assertIn("invalid argument: '--x'", output)
        self.assertIn("→ did you mean '--y'?", output)

    def testDeferredDoesNotExit(self):
        with self.console.capture() as capture:
            trigger(HelpStringError("bad layout"), shell=True, deferred=True)
        self.assertIn("Bad Help Layout", capture.get())

    def testFancyPanel(self):
        with self.console.capture() as capture:
            trigger(AccessError("unknown"), shell=True, deferred=True, fancy=True)
        output = capture.get()
        self.assertIn("tool", output)
        self.assertIn("unknown", output)

    def testRejectsNonTriggerable(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == '__main__':
    unittest.main()
