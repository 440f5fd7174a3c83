"""
Utility helper tests (Unset, coalesce, rename, mirror, ordinal, pluralize, mglob).
"""
import copy
import unittest
from unittest import TestCase

from overture.utils import *


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsNot(Unset, None)

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(None, str | Unset))

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass


class TestHelpers(TestCase):
    """Behavioral tests for the small helpers."""

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
        self.assertEqual(rename("decorated")(lambda: None).__qualname__, "decorated")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")

            def __init__(self):
                self._items = ["a"]
                self._table = {"k": "v"}
                self._tags = {"t"}

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        self.assertEqual(holder.tags, frozenset({"t"}))
        with self.assertRaises(TypeError):
            holder.table["k"] = "w"
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")

    def testPluralize(self):
        self.assertEqual(pluralize("Alias"), "Aliases")
        self.assertEqual(pluralize("overload"), "overloads")
        self.assertEqual(pluralize("command entry"), "command entries")
        self.assertEqual(pluralize("FLAG"), "FLAGS")


class TestMglob(TestCase):
    """Behavioral tests for module globbing."""

    def testConcreteNameReturnedAsIs(self):
        self.assertEqual(mglob("anything.at.all"), ["anything.at.all"])

    def testWildcardExpandsPackage(self):
        modules = mglob("overture.*")
        self.assertIn("overture.resolver", modules)
        self.assertIn("overture.tokens", modules)
        self.assertEqual(modules, sorted(modules))

    def testUnimportablePrefix(self):
        self.assertEqual(mglob("overture_missing_package.*"), [])

    def testInvalidPatterns(self):
        with self.assertRaises(ValueError):
            mglob("  ")
        with self.assertRaises(ValueError):
            mglob("*.commands")
        with self.assertRaises(TypeError):
            mglob(None)


if __name__ == "__main__":
    unittest.main()
