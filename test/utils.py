"""
Tests for the internal helpers.

Scope
- Unset: singleton identity, falsy semantics, copy/pickle identity, finality.
- mirror: read-only properties handing out container copies.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argconvert.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the sentinel.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetSubtype", (UnsetType,), {})


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            names = mirror("names")
            table = mirror("table")
            count = mirror("count")

            def __init__(self):
                self._names = ["a", "b"]
                self._table = {"key": ["value"]}
                self._count = 2

        self.holder = Holder()

    def testReturnsCopies(self) -> None:
        self.holder.names.append("c")
        self.holder.table["key"].append("other")
        self.assertEqual(self.holder.names, ["a", "b"])
        self.assertEqual(self.holder.table, {"key": ["value"]})
        self.assertEqual(self.holder.count, 2)

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.names = []

    def testPropertyName(self) -> None:
        self.assertEqual(type(self.holder).names.fget.__name__, "names")

    def testRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(42)


if __name__ == '__main__':
    unittest.main()
