"""
Evaluation contexts.

A Context is assembled once per program run and handed to the parser and the
help renderer. It bundles
- the term being evaluated and its arguments,
- the main (root) term and its arguments,
- every command choice of the program (empty for single-command programs),
- the environment lookup function, `name -> value or None`.

Dispatch
- classify() tells a single-command program (SIMPLE) from a multi-command one
  evaluating its root (MULTIPLE_MAIN) or one of its subcommands (MULTIPLE_SUB).
  The current and main terms are compared with `is`: terms are entities, and a
  subcommand whose fields happen to equal the root's is still a subcommand.
- rebind(term, args) derives the context for another subcommand once dispatch
  resolves it, sharing the main term, the choices and the lookup function.
"""
import copy
from enum import Enum

from .arguments import Argument
from .terms import Term
from .utils import Immutable


class EvaluationKind(Enum):
    SIMPLE = "simple"
    MULTIPLE_MAIN = "multiple-main"
    MULTIPLE_SUB = "multiple-sub"


def _entry(cls, field, entry, /):
    try:
        term, arguments = entry
    except (TypeError, ValueError):
        raise TypeError(f"{cls.__typename__} '{field}' must be a (term, arguments) pair") from None
    if not isinstance(term, Term):
        raise TypeError(f"{cls.__typename__} '{field}' must hold a term")
    arguments = tuple(arguments)
    for argument in arguments:
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} '{field}' arguments must be arguments")
    return term, arguments


class Context(Immutable):
    """
    Evaluation context of one program run.

    Construction
    - Context(term, main, choices, lookup)
      • term: (Term, iterable of Argument) being evaluated.
      • main: (Term, iterable of Argument) of the root command.
      • choices: iterable of (Term, iterable of Argument), every command of the program.
      • lookup: callable mapping an environment variable name to its value or None.

    Accessors
    - term / term_args, main / main_args, choices, lookup, getenv(name).
    """
    __introspectable__ = ("current", "root", "choices", "lookup")
    __displayable__ = ("current", "root", "choices")

    def __new__(cls, term, main, choices, lookup):
        if not callable(lookup):
            raise TypeError(f"{cls.__typename__} 'lookup' must be callable")
        return cls._assemble(
            current=_entry(cls, "term", term),
            root=_entry(cls, "main", main),
            choices=tuple(_entry(cls, "choices", choice) for choice in choices),
            lookup=lookup,
        )

    @property
    def term(self):
        return self.current[0]

    @property
    def term_args(self):
        return self.current[1]

    @property
    def main(self):
        return self.root[0]

    @property
    def main_args(self):
        return self.root[1]

    def getenv(self, name, /):
        """
        Look `name` up with the context's environment lookup function.
        """
        return self.lookup(name)

    def classify(self):
        if not self.choices:
            return EvaluationKind.SIMPLE
        # Identity, not equality.
        if self.term is self.main:
            return EvaluationKind.MULTIPLE_MAIN
        return EvaluationKind.MULTIPLE_SUB

    def rebind(self, term, arguments, /):
        """
        Return a context evaluating `term` with `arguments`; everything else is shared.
        """
        return copy.replace(self, current=_entry(type(self), "term", (term, arguments)))


__all__ = (
    "EvaluationKind",
    "Context",
)
