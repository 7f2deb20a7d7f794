"""
Utilities behavioral tests (sentinel, trimming, ordinals, rounding).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdline import Unset, UnsetType, coalesce, mirror, trim, ordinal, round_half_up


class TestUnset(TestCase):
    """Sentinel semantics."""

    def testUnsetIsFalseySingleton(self):
        self.assertFalse(Unset)
        self.assertIs(UnsetType(), Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):
                pass

    def testCoalesceOnlyReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIsNone(coalesce(Unset))


class TestMirror(TestCase):
    """Read-only properties hand out copies of containers."""

    def testMirrorReturnsCopies(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a"]

        holder = Holder()
        holder.items.append("b")
        self.assertEqual(holder.items, ["a"])
        with self.assertRaises(AttributeError):
            holder.items = []


class TestTrim(TestCase):
    """Token trimming."""

    def testTrimRemovesSpacesAndControlCharacters(self):
        self.assertEqual(trim("\t --port \n"), "--port")
        self.assertEqual(trim("\x00\x07value\x7f"), "value")

    def testTrimKeepsInnerSpaces(self):
        self.assertEqual(trim("  two words  "), "two words")

    def testTrimBuildsNewStrings(self):
        token = "  --help "
        self.assertEqual(trim(token), "--help")
        self.assertEqual(token, "  --help ")

    def testTrimEmptyAndBlank(self):
        self.assertEqual(trim(""), "")
        self.assertEqual(trim(" \t "), "")

    def testTrimRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            trim(b"--help")


class TestNumbers(TestCase):
    """Ordinals and rounding."""

    def testOrdinalWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(113), "113th")

    def testRoundHalfUp(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(31.2), 31)
        self.assertEqual(round_half_up(46.8), 47)
        self.assertEqual(round_half_up(-2.5), -3)
        self.assertEqual(round_half_up(4), 4)


if __name__ == "__main__":
    unittest.main()
