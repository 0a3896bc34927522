"""
Tests for the internal utilities.

This module verifies:
- Unset sentinel guarantees (singleton identity, falsiness, representation,
  copying, pickling, finality).
- coalesce() preserving legitimate falsy values.
- ordinal() wording.
- IntrospectableType read-only properties and representations.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from rich.console import Console

from haggis.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        """
        The sentinel is falsy but not equal to other falsy values.
        """
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        """
        Pickle round-trips preserve the identity of the singleton.
        """
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesArePreserved(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(8), "eighth")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(113), "113th")


class IntrospectableTypeTest(TestCase):

    def setUp(self) -> None:
        class SamplePoint(metaclass=IntrospectableType):
            __introspectable__ = ("x", "tags", "missing")
            __displayable__ = ("x", "tags")

            def __init__(self):
                self._x = 1
                self._tags = ["a"]
                self._missing = Unset

        self.point = SamplePoint()

    def testTypename(self) -> None:
        self.assertEqual(type(self.point).__typename__, "sample-point")

    def testPropertiesAreReadOnlyCopies(self) -> None:
        self.point.tags.append("b")
        self.assertEqual(self.point.tags, ["a"])
        with self.assertRaises(AttributeError):
            self.point.x = 2

    def testUnsetReadsAsNone(self) -> None:
        self.assertIsNone(self.point.missing)

    def testRepr(self) -> None:
        self.assertEqual(repr(self.point), "sample-point(x=1, tags=['a'])")

    def testRichRepr(self) -> None:
        console = Console(color_system=None, force_terminal=False, width=80)
        with console.capture() as capture:
            console.print(self.point)
        self.assertIn("SamplePoint(x=1", capture.get())


if __name__ == '__main__':
    unittest.main()
