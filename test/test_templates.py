"""
Templates module behavioral tests (construction, validation, callbacks).

Scope
- Validate public Template construction, normalization and read-only state.
- Validate the template() decorator: single-assignment guard and callback binding.
- Validate metadata constraints (aliases, arity, optional, help, callback).

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter, except to assert it is rejected.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from hashparse import Template, template
from hashparse.utils import Unset


class TestTemplate(TestCase):
    """Behavioral tests for Template declarations."""

    def testDefaults(self):
        t = Template("-v")
        self.assertEqual(t.aliases, ("-v",))
        self.assertEqual(t.arity, 0)
        self.assertFalse(t.optional)
        self.assertEqual(t.help, "")
        self.assertIs(t.callback, Unset)

    def testAliasesKeepDeclarationOrder(self):
        t = Template("-n", "--new", "new")
        self.assertEqual(t.aliases, ("-n", "--new", "new"))

    def testAliasesAreNotRestrictedToDashes(self):
        t = Template("add", "+")
        self.assertEqual(t.aliases, ("add", "+"))

    def testRequiresAtLeastOneAlias(self):
        with self.assertRaises(TypeError):
            Template()

    def testRejectsBadAliases(self):
        with self.assertRaises(TypeError):
            Template(1)
        with self.assertRaises(ValueError):
            Template("  ")
        with self.assertRaises(ValueError):
            Template(" -v")
        with self.assertRaises(ValueError):
            Template("-v", "-v")

    def testRejectsBadArity(self):
        with self.assertRaises(TypeError):
            Template("-v", arity="2")
        with self.assertRaises(TypeError):
            Template("-v", arity=True)
        with self.assertRaises(ValueError):
            Template("-v", arity=-1)

    def testRejectsBadOptionalHelpAndCallback(self):
        with self.assertRaises(TypeError):
            Template("-v", optional=1)
        with self.assertRaises(TypeError):
            Template("-v", help=None)
        with self.assertRaises(TypeError):
            Template("-v", callback=None)
        with self.assertRaises(TypeError):
            Template("-v", callback="print")

    def testHelpIsTrimmed(self):
        self.assertEqual(Template("-v", help="  Verbose output  ").help, "Verbose output")

    def testIsReadOnly(self):
        t = Template("-v")
        with self.assertRaises(AttributeError):
            t.arity = 3
        with self.assertRaises(AttributeError):
            del t.help

    def testCallForwardsValuesAsTuple(self):
        received = []
        t = Template("--add", arity=2, callback=received.append)
        t(["1", "2"])
        self.assertEqual(received, [("1", "2")])

    def testCallWithoutCallbackIsNoOp(self):
        self.assertIsNone(Template("-v")(()))

    def testReplaceDerivesANewTemplate(self):
        t = Template("-a", "--add", arity=2, help="Add")
        derived = copy.replace(t, arity=3, optional=True)
        self.assertEqual(derived.aliases, ("-a", "--add"))
        self.assertEqual(derived.arity, 3)
        self.assertTrue(derived.optional)
        self.assertEqual(t.arity, 2)

        renamed = copy.replace(t, aliases=("--plus",))
        self.assertEqual(renamed.aliases, ("--plus",))
        self.assertEqual(renamed.help, "Add")

    def testReplaceAcceptsSingleAlias(self):
        derived = copy.replace(Template("-x", help="Expand"), aliases="--expand")
        self.assertEqual(derived.aliases, ("--expand",))
        self.assertEqual(derived.help, "Expand")

    def testReplaceValidates(self):
        with self.assertRaises(ValueError):
            copy.replace(Template("-a"), arity=-2)

    def testRepr(self):
        self.assertEqual(
            repr(Template("-v", help="Verbose")),
            "template(aliases=('-v',), arity=0, optional=False, help='Verbose', callback=Unset)"
        )


class TestTemplateDecorator(TestCase):
    """Behavioral tests for the template() decorator factory."""

    def testBindsCallback(self):
        received = []

        @template("--say", arity=1, help="Repeat something")
        def say(values):
            received.append(values)

        self.assertIsInstance(say, Template)
        self.assertEqual(say.aliases, ("--say",))
        say(["hi"])
        self.assertEqual(received, [("hi",)])

    def testValidatesEagerly(self):
        with self.assertRaises(ValueError):
            template("--x", arity=-1)

    def testSingleAssignmentGuard(self):
        decorator = template("--once")

        @decorator
        def first(values):
            pass

        with self.assertRaises(TypeError):
            @decorator
            def second(values):
                pass

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            template("--x")("not callable")


if __name__ == "__main__":
    unittest.main()
