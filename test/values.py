"""
Values module behavioral tests (typed getters, help detection, snapshots).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdline import Parser, UnsetArgumentError, ValueStore, Argument, ValueType


def configured(*tokens):
    parser = Parser(["tool", *tokens])
    parser.argument.string("host", "h", "host_name", default="127.0.0.1")
    parser.argument.string("token", "k", "token")
    parser.argument.int("port", "p", "port", default=50000)
    parser.define_option("help", "?")
    parser.define_operand("database")
    return parser.parse()


class TestValueStore(TestCase):
    """Raw storage."""

    def testSeedOnlyOptionalArguments(self):
        store = ValueStore()
        store.seed(Argument("port", type=ValueType.INT, default=1))
        store.seed(Argument("token"))
        self.assertEqual(store.ints, {"port": 1})
        self.assertEqual(store.strings, {})

    def testStoreAndLookup(self):
        store = ValueStore()
        port = Argument("port", type=ValueType.INT)
        store.store(port, 5432)
        self.assertEqual(store.lookup(ValueType.INT, "port"), 5432)
        with self.assertRaises(KeyError):
            store.lookup(ValueType.STRING, "port")


class TestArguments(TestCase):
    """Read accessor."""

    def testMandatoryArgumentNotGiven(self):
        with self.assertRaises(UnsetArgumentError):
            configured().get_string("token")

    def testMandatoryArgumentGiven(self):
        self.assertEqual(configured("-k", "secret").get_string("token"), "secret")

    def testUnsetIsLookupError(self):
        with self.assertRaises(LookupError):
            configured().get("token")

    def testTypeMismatch(self):
        with self.assertRaises(TypeError):
            configured().get_int("host")

    def testUndeclaredNames(self):
        arguments = configured()
        with self.assertRaises(KeyError):
            arguments.get("nope")
        with self.assertRaises(KeyError):
            arguments.get("database")
        with self.assertRaises(KeyError):
            arguments.is_set("host")

    def testHelpRequestedByOption(self):
        self.assertTrue(configured("--help").is_help_requested())
        self.assertTrue(configured("-?").is_help_requested())

    def testHelpNotRequestedWhenConfigured(self):
        self.assertFalse(configured().is_help_requested())

    def testHelpRequestedWhenNothingIsConfigured(self):
        self.assertTrue(Parser(["tool"]).parse().is_help_requested())

    def testHelpNotRequestedWithOperands(self):
        self.assertFalse(Parser(["tool", "file"]).parse().is_help_requested())

    def testSnapshot(self):
        values = configured("-p", "1", "mydb").as_dict()
        self.assertEqual(dict(values), {
            "host": "127.0.0.1",
            "port": 1,
            "help": False,
            "database": "mydb",
        })
        with self.assertRaises(TypeError):
            values["port"] = 2

    def testRepr(self):
        self.assertTrue(repr(configured("mydb")).startswith("arguments(executable='tool', "))


if __name__ == "__main__":
    unittest.main()
