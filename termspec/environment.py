"""
Environment variable descriptors.

An Env records the name of an environment variable an argument can be read
from, the help text shown for it and the manual section listing it. Reading
the actual environment is left to the lookup function of an evaluation context.
"""
from . import manpage
from .utils import Immutable


class Env(Immutable):
    """
    Descriptor of one environment variable relevant to an argument.

    Fields
    - name: the variable name (e.g. "TOOL_CACHE").
    - doc: help text; "$(opt)" is expanded by help renderers to the option name.
    - section: title of the manual section where the variable is listed.

    Unlike terms, environment variables are plain values: two Env with the same
    fields compare equal.
    """
    __introspectable__ = ("name", "doc", "section")

    def __new__(cls, name, /, doc="See option $(opt).", section=manpage.ENVIRONMENT):
        for field, value in (("name", name), ("doc", doc), ("section", section)):
            if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        return cls._assemble(name=name, doc=doc, section=section)

    def __eq__(self, other):
        if not isinstance(other, Env):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())


__all__ = ("Env",)
