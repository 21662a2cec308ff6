"""
Tests for the internal utilities.

This module verifies:
- Singleton identity, falsy semantics and finality of the `Unset` sentinel.
- coalesce()/rename() contracts.
- Immutable storage: locked attributes, hidden backing fields, frozen views,
  copy/replace behavior and the DescriptorType representations.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from rich.console import Console
from rich.pretty import pretty_repr

from termspec.utils import *


class Sample(Immutable):
    __introspectable__ = ("label", "items", "table")

    def __new__(cls, label, items=(), table=None):
        return cls._assemble(label=label, items=list(items), table=dict(table or {}))


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(self.unset, Unset)

    def testRepr(self) -> None:
        self.assertEqual(repr(self.unset), "Unset")
        self.assertEqual(str(self.unset), "Unset")

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders 'Unset' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self.unset)
        self.assertEqual(capture.get().strip(), "Unset")

    def testFalsely(self) -> None:
        self.assertFalse(bool(self.unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(self.unset, None)
        self.assertNotEqual(self.unset, False)  # noqa: E712

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.unset), self.unset)
        self.assertIs(copy.deepcopy(self.unset), self.unset)

    def testPickleRoundTrip(self) -> None:
        restored: UnsetType = pickle.loads(pickle.dumps(self.unset))
        self.assertIs(restored, self.unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance (thread-safe singleton).
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, self.unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnionAnnotations(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(None, str | Unset)


class HelpersTest(TestCase):

    def testCoalesceReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameSetsNames(self):
        @rename("do_work")
        def work():
            pass

        self.assertEqual(work.__name__, "do_work")
        self.assertEqual(work.__qualname__, "do_work")

    def testRenameRejectsNonString(self):
        with self.assertRaises(TypeError):
            rename(1)

    def testViewRejectsNonString(self):
        with self.assertRaises(TypeError):
            view(1)


class ImmutableTest(TestCase):

    def setUp(self) -> None:
        self.sample = Sample("first", [1, 2], {"a": 1})

    def testFieldsAreExposed(self):
        self.assertEqual(self.sample.label, "first")

    def testSequencesAreFrozen(self):
        self.assertEqual(self.sample.items, (1, 2))
        self.assertIsInstance(self.sample.items, tuple)

    def testMappingsAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.sample.table["b"] = 2  # type: ignore[index]

    def testAttributesCannotBeSet(self):
        with self.assertRaises(AttributeError):
            self.sample.label = "second"  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            self.sample.other = "value"

    def testAttributesCannotBeDeleted(self):
        with self.assertRaises(AttributeError):
            del self.sample.label

    def testBackingStorageIsHidden(self):
        with self.assertRaises(AttributeError):
            getattr(self.sample, "-label")

    def testCopiesAreTheValueItself(self):
        self.assertIs(copy.copy(self.sample), self.sample)
        self.assertIs(copy.deepcopy(self.sample), self.sample)

    def testReplaceBuildsNewValue(self):
        other = copy.replace(self.sample, label="second")
        self.assertIsNot(other, self.sample)
        self.assertEqual(other.label, "second")
        self.assertEqual(other.items, (1, 2))
        self.assertEqual(self.sample.label, "first")

    def testReplaceRejectsUnknownFields(self):
        with self.assertRaises(TypeError):
            copy.replace(self.sample, missing=1)

    def testTypename(self):
        self.assertEqual(Sample.__typename__, "sample")
        self.assertEqual(type("CamelCaseName", (Immutable,), {}).__typename__, "camel-case-name")

    def testRepr(self):
        self.assertEqual(repr(Sample("x")), "sample(label='x', items=(), table=mappingproxy({}))")

    def testRichRepr(self):
        self.assertEqual(list(Sample("x").__rich_repr__())[0], ("label", "x"))
        self.assertIn("label='x'", pretty_repr(Sample("x")))


if __name__ == '__main__':
    unittest.main()
