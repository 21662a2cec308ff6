r"""
Termspec argument descriptors.

Overview
- Argument: one command-line argument, either named (an option such as -v/--verbose)
  or positional (no names, identified by its slot range on the command line).
- Absence policies (what happens when the argument is not given)
  • Required: the argument must be given.
  • Default(value): falls back to a string, possibly computed lazily.
- Option shapes (meaningful for named arguments only)
  • Flag: presence-only switch.
  • Valued: takes a value.
  • Fallback(value): the value is optional and falls back to the given literal.
- Position: a contiguous range of positional slots, counted from the head or
  from the tail of the positional sequence.

Construction and derivation
- Argument(*names, ...) normalizes names ("v" -> "-v", "verbose" -> "--verbose"),
  picks a default help section and takes a fresh id from an identity allocator.
- Every make_* transform returns a new Argument sharing the untouched fields
  (via copy.replace); the original is never modified, so a base argument can be
  branched into several variants safely.

Ordering
- positional_order(a, b) is the best-effort command-line order of positional
  arguments: head-anchored slots first by ascending start, then tail-anchored
  slots by descending start. It does not detect overlapping ranges.

Quick example:
    >>> from termspec.arguments import Argument, Position, Fallback, Default
    >>> files = Argument(metavar="FILE").make_positional(Position(0))
    >>> color = Argument("c", "color").make_option(Default("auto"), Fallback("always"))
    >>> color.name_sample()
    '--color'
"""
import copy
import functools
from typing import final

from . import manpage
from .environment import Env
from .faults import FaultCode, NamelessArgumentError, MixedArgumentWarning, trigger
from .identities import default_identities
from .utils import *


class Absence(Immutable):
    """
    Base type of absence policies.
    """


@final
class RequiredType(Absence):
    """
    Singleton absence policy: a missing argument is an error.
    """

    @functools.cache
    def __new__(cls):
        return cls._assemble()

    def __repr__(self):
        return "Required"

    def __reduce__(self):
        return "Required"


class Default(Absence):
    """
    Absence policy falling back to a default string.

    The value is either a string or a zero-argument callable producing one; a
    callable is evaluated on first access of `value` and cached from then on.
    """

    def __new__(cls, value, /):
        if callable(value):
            return cls._assemble(thunk=functools.cache(value), literal=Unset)
        if not isinstance(value, str):
            raise TypeError(f"{cls.__typename__} value must be a string or a callable")
        return cls._assemble(thunk=lambda: value, literal=value)

    @property
    def value(self):
        if not isinstance(value := object.__getattribute__(self, "-thunk")(), str):
            raise TypeError(f"{type(self).__typename__} value must evaluate to a string")
        return value

    @property
    def forced(self):
        """
        Whether the value is already known (literal, or a callable already evaluated).
        """
        if object.__getattribute__(self, "-literal") is not Unset:
            return True
        return object.__getattribute__(self, "-thunk").cache_info().currsize > 0

    def __replace__(self, /, **changes):
        raise TypeError(f"{type(self).__typename__} cannot be replaced")

    def __repr__(self):
        if not self.forced:
            return "default(<lazy>)"
        return f"default({object.__getattribute__(self, "-thunk")()!r})"

    def __rich_repr__(self):
        yield "value", object.__getattribute__(self, "-thunk")() if self.forced else "<lazy>"


class Shape(Immutable):
    """
    Base type of option shapes.
    """


@final
class FlagType(Shape):
    """
    Singleton shape: the option is a presence-only switch.
    """

    @functools.cache
    def __new__(cls):
        return cls._assemble()

    def __repr__(self):
        return "Flag"

    def __reduce__(self):
        return "Flag"


@final
class ValuedType(Shape):
    """
    Singleton shape: the option takes a value.
    """

    @functools.cache
    def __new__(cls):
        return cls._assemble()

    def __repr__(self):
        return "Valued"

    def __reduce__(self):
        return "Valued"


class Fallback(Shape):
    """
    The option takes an optional value; when given without one, `value` is used.
    """
    __introspectable__ = ("value",)

    def __new__(cls, value, /):
        if not isinstance(value, str):
            raise TypeError(f"{cls.__typename__} value must be a string")
        return cls._assemble(value=value)

    def __eq__(self, other):
        if not isinstance(other, Fallback):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((Fallback, self.value))


class Position(Immutable):
    """
    Contiguous range of positional slots.

    Fields
    - start: index of the first slot.
    - length: number of slots, or None when the range consumes the rest.
    - rev: when True, indices count from the end of the positional sequence.

    Position(-1) (head-anchored, unbounded) is NOT_POSITIONAL, the placeholder
    carried by named arguments.
    """
    __introspectable__ = ("rev", "start", "length")

    def __new__(cls, start, /, length=None, *, rev=False):
        if not isinstance(start, int) or isinstance(start, bool):
            raise TypeError(f"{cls.__typename__} 'start' must be an integer")
        if length is not None and (not isinstance(length, int) or isinstance(length, bool)):
            raise TypeError(f"{cls.__typename__} 'length' must be an integer or None")
        return cls._assemble(rev=bool(rev), start=start, length=length)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())


Required = RequiredType()
Flag = FlagType()
Valued = ValuedType()
NOT_POSITIONAL = Position(-1)


def _absence(cls, absence, /):
    if not isinstance(absence, Absence):
        raise TypeError(f"{cls.__typename__} 'absence' must be an absence policy")
    return absence


def _shape(cls, shape, /):
    if not isinstance(shape, Shape):
        raise TypeError(f"{cls.__typename__} 'shape' must be an option shape")
    return shape


def _position(cls, position, /):
    if not isinstance(position, Position):
        raise TypeError(f"{cls.__typename__} 'position' must be a position")
    return position


def _mixed(argument, transform, /):
    # the warning is built fully configured so trigger() frames stay constant
    if argument.is_positional:
        message = f"{transform}() gives an option shape to positional argument #{argument.id}"
    else:
        message = f"{transform}() gives a position to option {argument.name_sample()}"
    return MixedArgumentWarning(
        message,
        code=FaultCode.MIXED_ARGUMENT,
        title="mixed argument",
        hint="named arguments are options and nameless ones are positionals; keep them apart",
    )


class Argument(Immutable):
    """
    Descriptor of one command-line argument.

    Fields
    - id: unique integer handed out by the identity allocator.
    - absence: Required or Default(...); Default("") unless changed.
    - env: Env the value may be read from, or None.
    - doc: help text.
    - metavar: name of the value in help output.
    - section: title of the help section listing the argument.
    - position: slot range (NOT_POSITIONAL for named arguments).
    - shape: Flag, Valued or Fallback(...) (named arguments only).
    - names: normalized names in declaration order; empty for positionals.
    - repeatable: whether the option may be given several times.

    Arguments compare by identity; two separately constructed arguments always
    differ (their ids do).
    """

    __introspectable__ = (
        "id",
        "absence",
        "env",
        "doc",
        "metavar",
        "section",
        "position",
        "shape",
        "names",
        "repeatable",
    )

    def __new__(
            cls,
            *names,
            doc="",
            metavar="",
            section=Unset,
            env=Unset,
            allocator=default_identities
    ):
        """
        Construct an argument.

        Parameters
        - names: zero or more str
          Option names without dashes; one-character names become short options
          ("-v"), longer ones long options ("--verbose"). No names declares a
          positional argument.
        - doc: str
          Help text.
        - metavar: str
          Name of the value in help output.
        - section: Unset | str
          Help section; defaults to "ARGUMENTS" for positionals and "OPTIONS"
          for named arguments.
        - env: Unset | Env
          Environment variable the value may be read from.
        - allocator: Identities
          Source of the argument id (the process default unless given).
        """
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
        for field, value in (("doc", doc), ("metavar", metavar)):
            if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        if not isinstance(section, str | Unset):
            raise TypeError(f"{cls.__typename__} 'section' must be a string")
        if not isinstance(env, Env | Unset):
            raise TypeError(f"{cls.__typename__} 'env' must be an environment variable")

        return cls._assemble(
            id=next(allocator),
            absence=Default(""),
            env=coalesce(env),
            doc=doc,
            metavar=metavar,
            section=coalesce(section, manpage.OPTIONS if names else manpage.ARGUMENTS),
            position=NOT_POSITIONAL,
            shape=Flag,
            names=tuple("-" + name if len(name) == 1 else "--" + name for name in names),
            repeatable=False,
        )

    @property
    def is_optional(self):
        return bool(self.names)

    @property
    def is_positional(self):
        return not self.names

    @property
    def is_required(self):
        return self.absence is Required

    def name_sample(self):
        """
        Return the name to show when a single name must stand for the option.

        That is the first long name (more than two characters, dashes included)
        in declaration order, else the first name, so declaration order lets the
        host pick the name shown.

        Raises NamelessArgumentError for positional arguments.
        """
        if not (names := self.names):
            trigger(
                NamelessArgumentError(f"positional argument #{self.id} has no name to sample"),
                code=FaultCode.NAMELESS_ARGUMENT,
                title="nameless argument",
                hint="only named arguments (options) have a name sample",
            )
        return next((name for name in names if len(name) > 2), names[0])

    def make_required(self):
        return copy.replace(self, absence=Required)

    def make_repeatable(self):
        return copy.replace(self, repeatable=True)

    def make_option(self, absence, shape, /):
        changes = {"absence": _absence(type(self), absence), "shape": _shape(type(self), shape)}
        if self.is_positional:
            trigger(_mixed(self, "make_option"))
        return copy.replace(self, **changes)

    def make_repeatable_option(self, absence, shape, /):
        changes = {"absence": _absence(type(self), absence), "shape": _shape(type(self), shape)}
        if self.is_positional:
            trigger(_mixed(self, "make_repeatable_option"))
        return copy.replace(self, **changes, repeatable=True)

    def make_positional(self, position, /):
        changes = {"position": _position(type(self), position)}
        if self.is_optional:
            trigger(_mixed(self, "make_positional"))
        return copy.replace(self, **changes)

    def make_positional_with_absence(self, absence, position, /):
        changes = {"absence": _absence(type(self), absence), "position": _position(type(self), position)}
        if self.is_optional:
            trigger(_mixed(self, "make_positional_with_absence"))
        return copy.replace(self, **changes)


def _compare(x, y, /):
    return (x > y) - (x < y)


def positional_order(a, b, /):
    """
    Best-effort command-line order of two positional arguments.

    Returns a negative number, zero or a positive number like a classic cmp():
    - head-anchored ranges come before tail-anchored ones;
    - head-anchored ranges sort by ascending start;
    - tail-anchored ranges sort by descending start (innermost from the end first).

    Overlapping ranges are not detected here; parsers validate slot layouts.
    """
    if order := _compare(a.position.rev, b.position.rev):
        return order
    if a.position.rev:
        return _compare(b.position.start, a.position.start)
    return _compare(a.position.start, b.position.start)


def reversed_positional_order(a, b, /):
    return positional_order(b, a)


def positionals(arguments, /, reverse=False):
    """
    Return the positional arguments among `arguments`, in command-line order
    (or the reverse order when `reverse` is True).
    """
    order = reversed_positional_order if reverse else positional_order
    return sorted(
        (argument for argument in arguments if argument.is_positional),
        key=functools.cmp_to_key(order),
    )


__all__ = (
    # Absence policies
    "Absence",
    "RequiredType",
    "Required",
    "Default",

    # Option shapes
    "Shape",
    "FlagType",
    "Flag",
    "ValuedType",
    "Valued",
    "Fallback",

    # Positions
    "Position",
    "NOT_POSITIONAL",

    # Arguments
    "Argument",
    "positional_order",
    "reversed_positional_order",
    "positionals",
)
