"""
Evaluation context tests.

Scope
- Accessors for the current term, the main term, choices and the environment lookup.
- classify(): SIMPLE / MULTIPLE_MAIN / MULTIPLE_SUB, with identity-based term comparison.
- rebind(): new context sharing main, choices and lookup.
"""
import copy
import unittest
from unittest import TestCase

from termspec import Argument, Context, EvaluationKind, Position, Term

ENVIRONMENT = {"TOOL_COLOR": "never"}
lookup = ENVIRONMENT.get


class ContextTest(TestCase):

    def setUp(self):
        self.main = Term("tool", version="1.0")
        self.main_args = [Argument("v", "verbose")]
        self.build = Term("build", doc="Build things.")
        self.build_args = [Argument("j", "jobs"), Argument().make_positional(Position(0))]
        self.choices = [(self.main, self.main_args), (self.build, self.build_args)]

    def context(self, term, args, choices=Ellipsis):
        choices = self.choices if choices is Ellipsis else choices
        return Context((term, args), (self.main, self.main_args), choices, lookup)

    def testAccessors(self):
        context = self.context(self.build, self.build_args)
        self.assertIs(context.term, self.build)
        self.assertEqual(context.term_args, tuple(self.build_args))
        self.assertIs(context.main, self.main)
        self.assertEqual(context.main_args, tuple(self.main_args))
        self.assertEqual(context.choices, (
            (self.main, tuple(self.main_args)),
            (self.build, tuple(self.build_args)),
        ))
        self.assertIs(context.lookup, lookup)

    def testGetenv(self):
        context = self.context(self.main, self.main_args)
        self.assertEqual(context.getenv("TOOL_COLOR"), "never")
        self.assertIsNone(context.getenv("TOOL_MISSING"))

    def testSimpleWithoutChoices(self):
        context = self.context(self.main, self.main_args, choices=[])
        self.assertIs(context.classify(), EvaluationKind.SIMPLE)

    def testSimpleEvenForAnotherTerm(self):
        context = self.context(self.build, self.build_args, choices=())
        self.assertIs(context.classify(), EvaluationKind.SIMPLE)

    def testMultipleMain(self):
        context = self.context(self.main, self.main_args)
        self.assertIs(context.classify(), EvaluationKind.MULTIPLE_MAIN)

    def testMultipleSub(self):
        context = self.context(self.build, self.build_args)
        self.assertIs(context.classify(), EvaluationKind.MULTIPLE_SUB)

    def testLookalikeTermIsStillASubcommand(self):
        lookalike = Term("tool", version="1.0")
        context = self.context(lookalike, self.main_args)
        self.assertIs(context.classify(), EvaluationKind.MULTIPLE_SUB)

    def testRebind(self):
        context = self.context(self.main, self.main_args)
        rebound = context.rebind(self.build, self.build_args)
        self.assertIsNot(rebound, context)
        self.assertIs(rebound.term, self.build)
        self.assertEqual(rebound.term_args, tuple(self.build_args))
        self.assertIs(rebound.main, context.main)
        self.assertIs(rebound.choices, context.choices)
        self.assertIs(rebound.lookup, context.lookup)
        self.assertIs(rebound.classify(), EvaluationKind.MULTIPLE_SUB)
        # the original context still evaluates the main term
        self.assertIs(context.term, self.main)
        self.assertIs(context.classify(), EvaluationKind.MULTIPLE_MAIN)

    def testRebindBackToMain(self):
        context = self.context(self.build, self.build_args).rebind(self.main, self.main_args)
        self.assertIs(context.classify(), EvaluationKind.MULTIPLE_MAIN)

    def testArgumentsAreSnapshotted(self):
        args = list(self.main_args)
        context = Context((self.main, args), (self.main, args), [], lookup)
        args.append(Argument("q"))
        self.assertEqual(len(context.term_args), 1)

    def testMalformedEntries(self):
        with self.assertRaises(TypeError):
            Context(self.main, (self.main, []), [], lookup)
        with self.assertRaises(TypeError):
            Context(("tool", []), (self.main, []), [], lookup)
        with self.assertRaises(TypeError):
            Context((self.main, ["-v"]), (self.main, []), [], lookup)
        with self.assertRaises(TypeError):
            Context((self.main, []), (self.main, []), [self.build], lookup)
        with self.assertRaises(TypeError):
            Context((self.main, []), (self.main, []), [], ENVIRONMENT)

    def testReadOnly(self):
        context = self.context(self.main, self.main_args)
        with self.assertRaises(AttributeError):
            context.choices = ()  # type: ignore[misc]
        self.assertIs(copy.copy(context), context)

    def testRebindChecksItsArguments(self):
        context = self.context(self.main, self.main_args)
        with self.assertRaises(TypeError):
            context.rebind("build", [])


if __name__ == "__main__":
    unittest.main()
