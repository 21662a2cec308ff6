"""
Manual-page vocabulary shared by terms and their help renderers.

Section titles
- Conventional titles are exposed as constants; any string is still a valid
  section title (consumers only use them as grouping keys).

Blocks
- A Term's manual is an ordered sequence of blocks:
  • Section(title): starts a new section.
  • Paragraph(text): a paragraph of text.
  • Preformatted(text): verbatim text.
  • Item(label, text): a labelled paragraph (definition-list entry).
  • NoBlank: suppresses the blank line that would follow the previous block.
  • Blocks(*blocks): a nested sequence, spliced in place by renderers.

Rendering is not done here.
"""
import functools
from typing import final

from .utils import Immutable

NAME = "NAME"
SYNOPSIS = "SYNOPSIS"
DESCRIPTION = "DESCRIPTION"
COMMANDS = "COMMANDS"
ARGUMENTS = "ARGUMENTS"
OPTIONS = "OPTIONS"
COMMON_OPTIONS = "COMMON OPTIONS"
EXIT_STATUS = "EXIT STATUS"
ENVIRONMENT = "ENVIRONMENT"
FILES = "FILES"
BUGS = "BUGS"
EXAMPLES = "EXAMPLES"
AUTHORS = "AUTHORS"
SEE_ALSO = "SEE ALSO"


class Block(Immutable):
    """
    Base type of manual-page blocks; blocks compare by type and fields.
    """

    def __eq__(self, other):
        return self._fields() == other._fields() if type(other) is type(self) else NotImplemented

    def __hash__(self):
        return hash((type(self), self._fields()))


def _text(cls, name, value, /):
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} '{name}' must be a string")
    return value


class Section(Block):
    __introspectable__ = ("title",)

    def __new__(cls, title, /):
        return cls._assemble(title=_text(cls, "title", title))


class Paragraph(Block):
    __introspectable__ = ("text",)

    def __new__(cls, text, /):
        return cls._assemble(text=_text(cls, "text", text))


class Preformatted(Block):
    __introspectable__ = ("text",)

    def __new__(cls, text, /):
        return cls._assemble(text=_text(cls, "text", text))


class Item(Block):
    __introspectable__ = ("label", "text")

    def __new__(cls, label, text, /):
        return cls._assemble(label=_text(cls, "label", label), text=_text(cls, "text", text))


@final
class NoBlankType(Block):
    """
    Singleton block: no blank line between the previous and the next block.
    """

    @functools.cache
    def __new__(cls):
        return cls._assemble()

    def __repr__(self):
        return "NoBlank"

    def __reduce__(self):
        return "NoBlank"


class Blocks(Block):
    __introspectable__ = ("blocks",)

    def __new__(cls, *blocks):
        for block in blocks:
            if not isinstance(block, Block):
                raise TypeError(f"{cls.__typename__} members must be blocks")
        return cls._assemble(blocks=blocks)


NoBlank = NoBlankType()


__all__ = (
    # Section titles
    "NAME",
    "SYNOPSIS",
    "DESCRIPTION",
    "COMMANDS",
    "ARGUMENTS",
    "OPTIONS",
    "COMMON_OPTIONS",
    "EXIT_STATUS",
    "ENVIRONMENT",
    "FILES",
    "BUGS",
    "EXAMPLES",
    "AUTHORS",
    "SEE_ALSO",

    # Blocks
    "Block",
    "Section",
    "Paragraph",
    "Preformatted",
    "Item",
    "NoBlankType",
    "NoBlank",
    "Blocks",
)
