"""
Term descriptors.

A Term describes one command: the root command of a program or one of its
subcommands. It carries what help and manual renderers need (name, version,
one-line doc, the sections it is listed under, manual blocks) and nothing else;
a Term is fully determined at construction and has no transforms.

Identity
- Terms compare by identity, never by their fields. An evaluation context
  tells the main command apart from a subcommand with `is`, and two distinct
  commands may well share every field value. Do not add a structural __eq__.
"""
from . import manpage
from .utils import *


class Term(Immutable):
    """
    Descriptor of one command or subcommand.

    Fields
    - name: the command name.
    - version: version string reported by --version, or None.
    - doc: one-line description.
    - section: title of the manual section where the command is listed.
    - stdopts_section: title of the section listing the standard options (--help, --version).
    - man: tuple of manpage blocks.
    """
    __introspectable__ = (
        "name",
        "version",
        "doc",
        "section",
        "stdopts_section",
        "man",
    )
    __displayable__ = (
        "name",
        "version",
        "doc",
        "section",
        "stdopts_section",
    )

    def __new__(
            cls,
            name,
            /,
            doc="",
            version=Unset,
            section=manpage.COMMANDS,
            stdopts_section=manpage.OPTIONS,
            man=()
    ):
        if not isinstance(version, str | Unset):
            raise TypeError(f"{cls.__typename__} 'version' must be a string")
        for field, value in (
            ("name", name),
            ("doc", doc),
            ("section", section),
            ("stdopts_section", stdopts_section),
        ):
            if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} '{field}' must be a string")

        man = tuple(man)
        for block in man:
            if not isinstance(block, manpage.Block):
                raise TypeError(f"{cls.__typename__} 'man' must only contain manpage blocks")

        return cls._assemble(
            name=name,
            version=coalesce(version),
            doc=doc,
            section=section,
            stdopts_section=stdopts_section,
            man=man,
        )

    # Identity semantics, see module docstring.
    __eq__ = object.__eq__
    __hash__ = object.__hash__


__all__ = ("Term",)
