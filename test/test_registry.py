"""
Registry module behavioral tests (declarations, ordering, uniqueness).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import os.path
import sys
import unittest
from unittest import TestCase, mock

from argline import Arity, Registry, HELP_KEY


class TestRegistry(TestCase):
    """Behavioral tests for Registry declarations."""

    def setUp(self) -> None:
        self.registry = Registry("Hello", "World", "From", "TAAP")

    def testMetadata(self):
        self.assertEqual(self.registry.name, "Hello")
        self.assertEqual(self.registry.description, "World")
        self.assertEqual(self.registry.epilog, "From")
        self.assertEqual(self.registry.credits, "TAAP")

    def testNameDefaultsToInvocationName(self):
        with mock.patch.object(sys, "argv", ["/usr/bin/tool", "x"]):
            self.assertEqual(Registry().name, os.path.basename("/usr/bin/tool"))

    def testHelpOptionIsPreRegistered(self):
        option = self.registry.help_option
        self.assertEqual(self.registry.options, (option,))
        self.assertEqual(option.names, ("-h", "--help"))
        self.assertEqual(option.arity, Arity(0))
        self.assertEqual(option.key, HELP_KEY)

    def testDeclarationOrderIsKept(self):
        self.registry.declare_option("f", "foo", "0", "Some help!")
        self.registry.declare_option("-", "no-help", "2")
        self.registry.declare_positional("HELLO WORLD", "0")
        self.registry.declare_positional("GOOD BYE", "+", "Some help!")
        self.assertEqual([option.key for option in self.registry.options], ["h", "f", "no-help"])
        self.assertEqual([positional.key for positional in self.registry.positionals], ["HELLO WORLD", "GOOD BYE"])
        self.assertEqual(self.registry.keys(), ("h", "f", "no-help", "HELLO WORLD", "GOOD BYE"))

    def testDeclarationsAreReturned(self):
        option = self.registry.declare_option("a", "-", "0")
        self.assertEqual(option.names, ("-a",))
        positional = self.registry.declare_positional("BAR", 1)
        self.assertEqual(positional.arity, Arity(1))

    def testHistoricalAliases(self):
        self.registry.add_option("f", "foo", "0", None)
        self.registry.add_arg("BAR", "1", None)
        self.registry.add_exit_status(0, "Everything went well!")
        self.assertEqual(self.registry.keys(), ("h", "f", "BAR"))
        self.assertEqual(dict(self.registry.exit_statuses), {0: "Everything went well!"})

    def testCollectionsAreReadOnlyViews(self):
        self.assertIsInstance(self.registry.options, tuple)
        self.assertIsInstance(self.registry.positionals, tuple)
        with self.assertRaises(TypeError):
            self.registry.exit_statuses[0] = "nope"  # type: ignore[index]

    def testInvalidArityRejected(self):
        with self.assertRaises(ValueError):
            self.registry.declare_positional("BAR", "x")
        with self.assertRaises(ValueError):
            self.registry.declare_option("f", "foo", "-1")
        for literal in (" 2", "\t1\n"):
            with self.subTest(literal=literal):
                with self.assertRaises(ValueError):
                    self.registry.declare_option("-", "padded", literal)
        with self.assertRaises(ValueError):
            self.registry.declare_positional(" BAR", "1")
        self.assertEqual(self.registry.keys(), ("h",))

    def testDuplicatePlaceholderRejected(self):
        self.registry.declare_positional("BAR", "1")
        with self.assertRaises(ValueError):
            self.registry.declare_positional("BAR", "2")

    def testDuplicateShortRejected(self):
        self.registry.declare_option("f", "foo")
        with self.assertRaises(ValueError):
            self.registry.declare_option("f", "fizz")

    def testDuplicateLongRejected(self):
        self.registry.declare_option("f", "foo")
        with self.assertRaises(ValueError):
            self.registry.declare_option("g", "foo")

    def testBuiltInHelpCannotBeRedeclared(self):
        with self.assertRaises(ValueError):
            self.registry.declare_option("h", "hello")
        with self.assertRaises(ValueError):
            self.registry.declare_option("-", "help")

    def testKeysCannotCollideAcrossKinds(self):
        self.registry.declare_positional("BAR", "1")
        with self.assertRaises(ValueError):
            self.registry.declare_option("-", "BAR")

    def testOptionLookup(self):
        option = self.registry.declare_option("f", "foo")
        self.assertIs(self.registry.option_for(short="f"), option)
        self.assertIs(self.registry.option_for(long="foo"), option)
        self.assertIsNone(self.registry.option_for(short="z"))
        with self.assertRaises(TypeError):
            self.registry.option_for()
        with self.assertRaises(TypeError):
            self.registry.option_for(short="f", long="foo")

    def testExitStatusesSortedByCode(self):
        self.registry.declare_exit_status(2, "Something went horribly wrong!")
        self.registry.declare_exit_status(0, "Everything went just fine")
        self.registry.declare_exit_status(2, "Really wrong")
        self.assertEqual(list(self.registry.exit_statuses.items()), [(0, "Everything went just fine"), (2, "Really wrong")])

    def testExitStatusValidation(self):
        with self.assertRaises(TypeError):
            self.registry.declare_exit_status("0", "nope")
        with self.assertRaises(ValueError):
            self.registry.declare_exit_status(-1, "nope")

    def testRuntimeFlags(self):
        registry = Registry("tool", colorful=True, fancy=True)
        self.assertTrue(registry.colorful)
        self.assertTrue(registry.fancy)
        self.assertFalse(self.registry.colorful)

    def testMetadataMustBeStrings(self):
        with self.assertRaises(TypeError):
            Registry(1)


if __name__ == "__main__":
    unittest.main()
