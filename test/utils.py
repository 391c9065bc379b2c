"""
Utility tests (Unset, coalesce, rename, StorageGuard/view).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argtable.utils import StorageGuard, Unset, UnsetType, coalesce, rename, view


class Sample(StorageGuard):
    items = view("items")
    label = view("label")

    def __new__(cls, items, label):
        with super().__new__(cls) as self:
            setattr(self, "-items", items)
            setattr(self, "-label", label)
        return self


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)


class TestCoalesce(TestCase):

    def testOnlyUnsetIsReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("name", "fallback"), "name")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testRenameInPlace(self):
        def function():
            pass
        self.assertIs(rename(function, "other"), function)
        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testViewGetterIsNamed(self):
        self.assertEqual(Sample.label.fget.__name__, "label")

    def testRenameValidation(self):
        with self.assertRaises(TypeError):
            rename(3, "name")
        with self.assertRaises(TypeError):
            rename(len, 3)
        with self.assertRaises(TypeError):
            rename(len)


class TestStorageGuard(TestCase):

    def setUp(self):
        self.sample = Sample(["a", "b"], "label")

    def testViewsReturnSnapshots(self):
        self.assertEqual(self.sample.items, ("a", "b"))
        self.assertEqual(self.sample.label, "label")

    def testStorageIsHidden(self):
        with self.assertRaises(AttributeError):
            getattr(self.sample, "-items")

    def testStorageIsLockedAfterBuild(self):
        with self.assertRaises(AttributeError):
            setattr(self.sample, "-label", "other")
        self.assertEqual(self.sample.label, "label")


if __name__ == "__main__":
    unittest.main()
