"""
Utilities behavioral tests (sentinel, coalescing, renaming, mirrors, ordinals).

Scope
- Validate the Unset sentinel: singleton, falsey, copy/pickle stable, sealed.
- Validate coalesce(), rename() in both forms and mirror() read-only views.
- Validate ordinal() wording and suffixes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from hashparse.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionChecks(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", Unset | str)
        self.assertNotIsInstance(1, str | Unset)

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):
                pass


class TestHelpers(TestCase):
    """Behavioral tests for coalesce(), rename() and mirror()."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameForms(self):
        def original():
            pass

        self.assertIs(rename(original, "renamed"), original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__name__, "decorated")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename("not callable", "name")
        with self.assertRaises(TypeError):
            rename(print, 1)
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename()

    def testMirror(self):
        class Holder:
            items = mirror("items")
            names = mirror("names")
            tags = mirror("tags")
            count = mirror("count")

            def __init__(self):
                self._items = ["a"]
                self._names = {"a": 1}
                self._tags = {"x"}
                self._count = 3

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        self.assertIsInstance(holder.tags, frozenset)
        self.assertEqual(holder.count, 3)
        with self.assertRaises(TypeError):
            holder.names["b"] = 2
        with self.assertRaises(AttributeError):
            holder.count = 4
        self.assertEqual(Holder.count.fget.__name__, "count")

    def testMirrorRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(100), "100th")


if __name__ == "__main__":
    unittest.main()
