"""
Layout engine behavioral tests (word wrapping, escapes, soft hyphens, UTF-8).

Scope
- Every emitted line is exactly as wide as requested.
- Multi-byte characters are never split, attribute escapes are copied and
  re-opened on continuation lines.
- Soft hyphens render as "-" only where a line breaks; the non-breaking space
  renders as a space and keeps words together.

Conventions
- Test method names follow CamelCase per project convention.
- Expected lines are bytes: every line starts by re-opening the carried attribute.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdline import (
    Cursor,
    TextRun,
    exhausted,
    format_line,
    hyphen,
    strip_attributes,
    visible_width,
)


def lines(text, limit, soft_hyphen=0, break_all=False):
    return list(TextRun(text).lines(limit, soft_hyphen, break_all=break_all))


class TestWrapping(TestCase):
    """Word wrapping at spaces."""

    def testWrapsAtSpaces(self):
        self.assertEqual(lines("a quick brown fox", 8), [
            b"\x1b[0ma quick ",
            b"\x1b[0mbrown   ",
            b"\x1b[0mfox     ",
        ])

    def testEveryLineHasTheRequestedWidth(self):
        text = "The hash algorithm to be used for the salted hashing, typically a weaker one."
        for limit in (1, 5, 9, 17, 40, 120):
            for line in lines(text, limit):
                self.assertEqual(visible_width(line), limit)

    def testWordsAreReconstructed(self):
        text = "The host name or IP address of the server."
        joined = b"".join(strip_attributes(line) for line in lines(text, 11))
        self.assertEqual(" ".join(joined.decode().split()), text)

    def testWordFittingExactly(self):
        self.assertEqual(lines("brown fox", 9), [b"\x1b[0mbrown fox"])

    def testOverlongWordIsCut(self):
        self.assertEqual(lines("abcdefgh", 3), [
            b"\x1b[0mabc",
            b"\x1b[0mdef",
            b"\x1b[0mgh ",
        ])

    def testLeadingBlanksAreSkipped(self):
        self.assertEqual(lines("  \t word", 6), [b"\x1b[0mword  "])

    def testEmptyTextHasNoLines(self):
        self.assertEqual(lines("", 10), [])
        self.assertEqual(lines("   ", 10), [])

    def testBreakAllCutsAtAnyCharacter(self):
        self.assertEqual(lines("abc defgh", 5), [b"\x1b[0mabc  ", b"\x1b[0mdefgh"])
        self.assertEqual(lines("abc defgh", 5, break_all=True), [b"\x1b[0mabc d", b"\x1b[0mefgh "])

    def testLimitMustBePositive(self):
        with self.assertRaises(ValueError):
            format_line(b"text", Cursor(), 0)


class TestMultiByte(TestCase):
    """UTF-8 sequences count as one column and are never split."""

    def testTwoByteCharacters(self):
        self.assertEqual([line.decode() for line in lines("ééééé", 2)], [
            "\x1b[0méé",
            "\x1b[0méé",
            "\x1b[0mé ",
        ])

    def testThreeByteCharacters(self):
        self.assertEqual([line.decode() for line in lines("日本語", 2)], [
            "\x1b[0m日本",
            "\x1b[0m語 ",
        ])

    def testBrokenSequencesCountOneColumnPerByte(self):
        self.assertEqual(visible_width(b"\x80\x80 "), 3)
        self.assertEqual(visible_width(b"\xff\xfe"), 2)
        self.assertEqual(visible_width(b"\xe6\x97"), 1)
        self.assertEqual(visible_width(b"\xe6\x97x"), 2)

    def testBrokenSequencesKeepTheRequestedWidth(self):
        text = b"ab\xe6\x97 cd \xff\xfe ef \x80\x80"
        for limit in (1, 2, 3, 5):
            for line in lines(text, limit):
                self.assertEqual(visible_width(line), limit)

    def testVisibleWidthCountsCharacters(self):
        self.assertEqual(visible_width("héllo"), 5)
        self.assertEqual(visible_width("\033[1m日本\033[0m"), 2)


class TestEscapes(TestCase):
    """Attribute escapes are copied and carried across lines."""

    def testAttributeIsReopenedOnNextLine(self):
        self.assertEqual(lines("\033[1mbold words", 5), [
            b"\x1b[0m\x1b[1mbold ",
            b"\x1b[1mwords",
        ])

    def testLastEscapeOfAWordIsCarried(self):
        cursor = Cursor()
        text = TextRun("\033[1mbold\033[0m next")
        self.assertEqual(format_line(text, cursor, 5), b"\x1b[0m\x1b[1mbold\x1b[0m ")
        self.assertEqual(cursor.attribute, 0)
        self.assertEqual(format_line(text, cursor, 5), b"\x1b[0mnext ")

    def testTrailingResetIsKept(self):
        cursor = Cursor()
        text = TextRun("\033[1mbold words\033[0m")
        self.assertEqual(format_line(text, cursor, 5), b"\x1b[0m\x1b[1mbold ")
        self.assertEqual(cursor.attribute, 1)
        self.assertEqual(format_line(text, cursor, 5), b"\x1b[1mwords\x1b[0m")
        self.assertEqual(cursor.attribute, 0)
        self.assertTrue(text.exhausted(cursor))

    def testEscapesAreNotVisible(self):
        self.assertEqual(visible_width("\033[4mvalue\033[0m"), 5)
        self.assertEqual(strip_attributes("\033[2m\033[4mport\033[0m"), b"port")

    def testUnknownEscapeIsText(self):
        # ESC [ 3 m is not an attribute escape
        self.assertEqual(strip_attributes("\033[3mx"), b"\x1b[3mx")

    def testOutputSinkReceivesTheLine(self):
        sink = bytearray(b">")
        line = format_line("word", Cursor(), 6, out=sink)
        self.assertEqual(bytes(sink), b">" + line)


class TestSoftHyphen(TestCase):
    """Soft hyphens are preferred break points."""

    def testHyphenRenderedAtBreaks(self):
        self.assertEqual(lines("con|nect|ing", 6, "|"), [
            b"\x1b[0mcon-  ",
            b"\x1b[0mnect- ",
            b"\x1b[0ming   ",
        ])

    def testHyphenDroppedWhenTheWordFits(self):
        self.assertEqual(lines("con|nect|ing", 10, "|"), [b"\x1b[0mconnecting"])

    def testHyphenIsPlainTextWhenDisabled(self):
        self.assertEqual(lines("con|nect|ing", 6), [b"\x1b[0mcon|ne", b"\x1b[0mct|ing"])

    def testBreakAllIgnoresSoftHyphen(self):
        self.assertEqual(lines("ab|cd", 3, "|", break_all=True), [b"\x1b[0mab|", b"\x1b[0mcd "])

    def testHyphenValidation(self):
        self.assertEqual(hyphen("|"), ord("|"))
        self.assertEqual(hyphen(None), 0)
        self.assertEqual(hyphen(b"~"), ord("~"))
        with self.assertRaises(ValueError):
            hyphen(" ")
        with self.assertRaises(ValueError):
            hyphen("||")
        with self.assertRaises(ValueError):
            hyphen("é")
        with self.assertRaises(TypeError):
            hyphen(1.5)


class TestNonBreakingSpace(TestCase):
    """0x1D renders as a space and glues words."""

    def testRenderedAsSpace(self):
        self.assertEqual(lines("a\x1db c", 3), [b"\x1b[0ma b", b"\x1b[0mc  "])

    def testKeepsWordsTogether(self):
        self.assertEqual(lines("x ab\x1dcd", 6), [b"\x1b[0mx     ", b"\x1b[0mab cd "])


class TestExhausted(TestCase):
    """Nothing visible left."""

    def testOnlyBlanksAndEscapesLeft(self):
        self.assertTrue(exhausted(b"  \033[0m \t", 0))
        self.assertFalse(exhausted(b"  x", 0))
        self.assertTrue(exhausted(b"abc", 3))

    def testSoftHyphenIsNotVisible(self):
        self.assertTrue(exhausted(b"||", 0, ord("|")))
        self.assertFalse(exhausted(b"||", 0))


if __name__ == "__main__":
    unittest.main()
