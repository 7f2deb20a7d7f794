"""
Diagnostic renderer behavioral tests (caret window over long lines).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdline import Diagnostic, Window, window


class TestWindow(TestCase):
    """Window selection at the default width of 80 (head budget 54, tail budget 26)."""

    def testShortLineStartsAtZero(self):
        self.assertEqual(window(20, 5, 80), Window(0, 5, 20))

    def testEarlyCaretStartsAtZero(self):
        self.assertEqual(window(200, 10, 80), Window(0, 10, 80))

    def testCaretNearTheEndAlignsToTheEnd(self):
        self.assertEqual(window(200, 190, 80), Window(120, 70, 80))

    def testCaretInTheMiddleKeepsTheHeadBudget(self):
        self.assertEqual(window(200, 100, 80), Window(46, 54, 80))

    def testCaretPastTheEndStaysInsideTheWidth(self):
        self.assertEqual(window(112, 112, 80), Window(33, 79, 79))
        self.assertEqual(window(80, 80, 80), Window(1, 79, 79))

    def testNarrowWidth(self):
        # head budget 2, tail budget 1
        self.assertEqual(window(10, 5, 3), Window(3, 2, 3))
        self.assertEqual(window(10, 9, 3), Window(7, 2, 3))

    def testWidthMustBePositive(self):
        with self.assertRaises(ValueError):
            window(10, 0, 0)


class TestDiagnostic(TestCase):
    """Message, windowed line and caret."""

    def testRenderShortLine(self):
        diagnostic = Diagnostic("unknown argument '--prot'", "tool --prot 1", 5)
        self.assertEqual(diagnostic.render(), "unknown argument '--prot'\ntool --prot 1\n     ^")

    def testCaretUnderOffendingTokenOnLongLine(self):
        line = "prog " + "a" * 100 + " --bad"
        diagnostic = Diagnostic("unknown argument '--bad'", line, line.index("--bad"))
        excerpt, caret = diagnostic.snippet()
        self.assertEqual(len(excerpt), 80)
        self.assertEqual(caret, " " * 75 + "^")
        self.assertEqual(excerpt[75:], "--bad")

    def testCaretInMiddleOfLongLine(self):
        line = "x" * 100 + "!" + "y" * 99
        excerpt, caret = Diagnostic("bad", line, 100).snippet()
        self.assertEqual(len(excerpt), 80)
        self.assertEqual(excerpt[len(caret) - 1], "!")

    def testMultiByteLineKeepsCaretUnderCharacter(self):
        diagnostic = Diagnostic("unknown argument letter 'x'", "é -x", 4)
        self.assertEqual(diagnostic.column, 3)
        self.assertEqual(diagnostic.snippet(), ("é -x", "   ^"))

    def testCaretAtEndOfLine(self):
        diagnostic = Diagnostic("missing value", "tool --port", 11)
        self.assertEqual(diagnostic.snippet(), ("tool --port", " " * 11 + "^"))

    def testMissingValueCaretOnLongLine(self):
        line = "prog " + "a" * 100 + " --port"
        excerpt, caret = Diagnostic("missing value", line, len(line)).snippet()
        self.assertEqual(len(caret), 80)
        self.assertEqual(caret, " " * 79 + "^")
        self.assertEqual(excerpt, line[33:])
        self.assertTrue(excerpt.endswith("--port"))

    def testPositionMustBeInsideTheLine(self):
        with self.assertRaises(ValueError):
            Diagnostic("bad", "tool", 5)
        with self.assertRaises(ValueError):
            Diagnostic("bad", "tool", -1)

    def testMessageAndLineMustBeStrings(self):
        with self.assertRaises(TypeError):
            Diagnostic(b"bad", "tool", 0)


if __name__ == "__main__":
    unittest.main()
