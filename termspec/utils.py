"""
Termspec utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics and UX.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the descriptor layers (environment, arguments, terms, contexts).

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks and reprs.

- Immutable / view("field")
  • Backing storage for descriptor fields under non-identifier names ('-field'),
    writable only while the value is being assembled, then locked for good.
  • view() publishes a backing field as a read-only property with a frozen snapshot.

- DescriptorType
  • Metaclass giving every descriptor a __typename__, read-only properties for the
    names in __introspectable__, and stable __repr__/__rich_repr__ implementations.

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Build descriptors through Immutable._assemble(**fields); derive new ones with copy.replace().

Quick examples
    >>> one = coalesce(Unset, "fallback")  # "fallback"
    >>> two = coalesce(None, "fallback")    # None  (None is preserved)
    >>> @rename("do_work")
    ... def work(): ...
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        """
        Falsey sentinel: allows simple truthiness checks without equating Unset to None.
        """
        return False

    def __repr__(self):
        """
        Human-friendly representation used in logs and errors.
        """
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0 or "" are
    preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator setting a stable __name__/__qualname__ on generated callables,
    so tracebacks and reprs show `name` instead of the closure's own name.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def view(name, /):
    """
    Build a read-only property over a backing field.

    storage convention
    - the actual value is stored under a non-identifier backing name prefixed with '-'
      (e.g., '-metavar'). Immutable prevents direct access to these names.

    behavior
    - the property returns a frozen snapshot of the underlying value:
      • Sequence (non-str) → tuple
      • Mapping           → MappingProxyType
      • Set               → frozenset
      • other types       → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


class DescriptorType(type):
    """
    Metaclass that turns descriptor classes into introspectable value types.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the '-name' storage slot (see view()).
    - Provide stable, readable __repr__/__rich_repr__ implementations unless the
      class defines its own.

    Conventions
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: view(field) for field in namespace.get("__introspectable__", ())
            },
            **options,
        )

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                """
                Return a concise, stable representation with the displayable fields.

                Example
                - argument(id=3, names=('-v', '--verbose'), ...)
                """
                return f"{type(self).__typename__}({
                    ", ".join(f"{name}={object!r}" for name, object in self.__rich_repr__())
                })"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                """
                Yield (name, object) pairs for pretty printers such as rich.
                """
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        return self


class Immutable(metaclass=DescriptorType):
    """
    Base for descriptors whose fields are fixed once assembled.

    rules
    - any attribute whose name starts with '-' is internal backing storage and
      cannot be read through normal attribute access (AttributeError).
    - no attribute can be written or deleted once assembly is over.

    assembly
    - the context-managed __new__ opens a build phase during which backing
      fields may be written:
        with Immutable.__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block the instance is locked.
    - _assemble(**fields) wraps this for the common case; __replace__ reuses it
      so copy.replace(value, field=...) derives a new value sharing every
      untouched field.
    """

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        object.__setattr__(self, "-building", True)
        try:
            yield self
        finally:
            object.__setattr__(self, "-building", False)

    @classmethod
    def _assemble(cls, /, **fields):
        with Immutable.__new__(cls) as self:
            for name, value in fields.items():
                setattr(self, "-" + name, value)
        return self

    def _fields(self):
        return tuple(object.__getattribute__(self, "-" + name) for name in type(self).__introspectable__)

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if not object.__getattribute__(self, "-building"):
            raise AttributeError(f"{type(self).__typename__} attributes are read-only")
        object.__setattr__(self, name, value)

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} attributes cannot be deleted")

    def __replace__(self, /, **changes):
        if unknown := changes.keys() - set(type(self).__introspectable__):
            raise TypeError(f"{type(self).__typename__} has no field(s) {", ".join(sorted(unknown))}")
        fields = dict(zip(type(self).__introspectable__, self._fields()))
        return type(self)._assemble(**(fields | changes))

    # Values never change, so copies are the values themselves.
    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "view",

    # Types
    "UnsetType",
    "DescriptorType",
    "Immutable",

    # Constants
    "Unset",
)
