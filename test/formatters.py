"""
Help string tests.

Scope
- format_help: section order and content, signatures, default lists,
  description wrapping, header/footer, layout validation.
- HelpString: rich rendering of the same sections.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from argconvert import HelpString, HelpStringError, Parameter, ParameterMap, format_help


def build():
    parameters = ParameterMap()
    parameters(
        Parameter.positional(str, "SOURCE", 0).min_args(1)
    )(
        Parameter.keyword(int, ["jobs", "j"])
        .add_default("4")
        .placeholder("<N>")
        .describe("Number of worker processes to start for the build.")
    )(
        Parameter.positional(str, "TARGET", 1).set_default(["out", "build"])
    )(
        Parameter.keyword(str, ["include", "I"]).min_args(1)
    )(
        Parameter.flag(["v", "verbose"]).describe("Print more.")
    )
    return parameters


class TestFormatHelp(TestCase):

    def testLayout(self):
        self.assertEqual(
            format_help(build(), "usage: make [options]", "\n", 30, 2, 4),
            "usage: make [options]"
            "\n"
            "Required parameters:\n"
            "  SOURCE\n"
            "  --include, -I <ARG>\n"
            "\n"
            "Optional positional parameters:\n"
            "  TARGET ( = out build)\n"
            "\n"
            "Optional keyword parameters:\n"
            "  --jobs, -j <N> ( = 4)\n"
            "    Number of worker processes\n"
            "    to start for the build.\n"
            "\n"
            "Flags:\n"
            "  -v, --verbose\n"
            "    Print more.\n"
            "\n"
        )

    def testDefaultLayout(self):
        text = format_help(build())
        self.assertTrue(text.startswith("\nRequired parameters:\n    SOURCE\n"))
        self.assertIn("    --jobs, -j <N> ( = 4)\n        Number of worker processes to start for the build.\n", text)

    def testEmptyMap(self):
        self.assertEqual(format_help(ParameterMap(), "header", "footer"), "headerfooter")

    def testOnlyFlags(self):
        parameters = ParameterMap()(Parameter.flag(["quiet", "q"]))
        self.assertEqual(format_help(parameters), "\nFlags:\n    --quiet, -q\n")

    def testEmptyPlaceholder(self):
        parameters = ParameterMap()(Parameter.keyword(str, ["mode"]).placeholder(""))
        self.assertEqual(format_help(parameters), "\nOptional keyword parameters:\n    --mode\n")

    def testOptionalPositionalsByPosition(self):
        parameters = ParameterMap()
        parameters(Parameter.positional(str, "LAST", 9))(Parameter.positional(str, "FIRST", -2))
        self.assertEqual(
            format_help(parameters),
            "\nOptional positional parameters:\n    FIRST\n    LAST\n",
        )

    def testWrapBreaksOnSpaces(self):
        parameters = ParameterMap()(Parameter.flag(["x"]).describe("aaa bbb ccc ddd"))
        self.assertEqual(
            format_help(parameters, width=9, parameter_indentation=0, description_indentation=2),
            "\nFlags:\n-x\n  aaa bbb\n  ccc ddd\n",
        )

    def testWrapCollapsesBreakingSpace(self):
        # a space right at the break is consumed, no line starts with it
        parameters = ParameterMap()(Parameter.flag(["x"]).describe("aaaa  bbbb"))
        self.assertEqual(
            format_help(parameters, width=6, parameter_indentation=0, description_indentation=2),
            "\nFlags:\n-x\n  aaaa\n  bbbb\n",
        )

    def testWrapCutsLongWords(self):
        parameters = ParameterMap()(Parameter.flag(["x"]).describe("abcdefghij"))
        self.assertEqual(
            format_help(parameters, width=8, parameter_indentation=0, description_indentation=2),
            "\nFlags:\n-x\n  abcdef\n  ghij\n",
        )

    def testInvalidLayout(self):
        parameters = build()
        for width, parameter_indentation, description_indentation in (
                (0, 0, 0),
                (-5, 0, 0),
                (80, -1, 8),
                (80, 4, -1),
                (8, 8, 4),
                (8, 4, 8),
                (8, 4, 12),
        ):
            with self.assertRaises(HelpStringError):
                format_help(parameters, "", "", width, parameter_indentation, description_indentation)

    def testZeroIndentationAllowed(self):
        self.assertIn("\nFlags:\n-v, --verbose\nPrint more.\n", format_help(build(), "", "", 20, 0, 0))

    def testRejectsNonMap(self):
        with self.assertRaises(TypeError):
            format_help([])


class TestHelpString(TestCase):

    def render(self, renderable):
        console = Console(color_system=None, force_terminal=False, width=100)
        with console.capture() as capture:
            console.print(renderable)
        return capture.get()

    def testSections(self):
        output = self.render(HelpString(build(), header="usage: make [options]", footer="see the manual"))
        self.assertIn("usage: make [options]", output)
        self.assertIn("Required parameters:", output)
        self.assertIn("    --include, -I <ARG>", output)
        self.assertIn("    --jobs, -j <N> ( = 4)", output)
        self.assertIn("        Number of worker processes to start for the build.", output)
        self.assertIn("    -v, --verbose", output)
        self.assertIn("see the manual", output)
        self.assertLess(output.index("Optional positional parameters:"), output.index("Flags:"))

    def testRejectsNonMap(self):
        with self.assertRaises(TypeError):
            HelpString([])


if __name__ == '__main__':
    unittest.main()
