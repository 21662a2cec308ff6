"""
Termspec faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the descriptor
  model can surface. Codes are grouped by domain to keep messages consistent
  and make logs/searches predictable.
- DescriptorFault / DescriptorWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Fatal vs. non-fatal
- Errors raised here are programmer-misuse or invariant violations (a name sample
  requested from a positional argument, an exhausted identity allocator). They are
  never meant to be recovered from by the descriptor layer itself.
- Warnings flag descriptors that are still well-formed values but break the
  named/positional split that parsers rely on.

Integration
- Descriptor code calls trigger(fault, **ctx).
- In non-shell mode (the default), exceptions are raised and warnings go through
  the warnings module; in shell mode, they are rendered via rich on stderr.
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the descriptor model (stable identifiers).

    grouping (by high-level domain)
    - arguments (2110x)
      • NAMELESS_ARGUMENT
    - identities (2120x)
      • EXHAUSTED_IDENTITIES
    - warnings (2210x)
      • MIXED_ARGUMENT

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- argument errors (21xxx) ---
    NAMELESS_ARGUMENT    = 21101

    # --- identity errors (21xxx) ---
    EXHAUSTED_IDENTITIES = 21201

    # --- warnings (22xxx) ---
    MIXED_ARGUMENT       = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    palette maps the role names ("code", "title", "message") to the style keys
    looked up in the merged style table.
    """
    main = __import__("__main__")

    styles = defaultdict(str, {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "error-code": "bold #00E5FF",  # neon cyan fault code
        "error-title": "bold #FF4DA6",  # friendly pinky title
        "warning-code": "bold #FFB400",  # amber fault code for warnings
        "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

        # body
        "error-message": "#C8C8D0",  # soft light gray message
        "warning-message": "#D6D6DE",  # slightly lighter gray body
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    } | getattr(main, "__styles__", {}))

    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "termspec"), "prog-name"),
        " — ",
        text(fault.options["code"].normalize(), palette["code"]),
        " | ",
        text(fault.options.get("title", "").title(), palette["title"]),
        " ]"
    )
    message = text(fault.message, palette["message"])

    renders = [message]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class DescriptorFault(Exception):
    """
    Base class for fatal descriptor faults.

    options (read-only mapping)
    - code: FaultCode identifying the fault.
    - title: short human title, rendered title-cased in the header.
    - hint: one actionable sentence.
    - shell: when True, print and exit instead of raising.
    - fancy: render inside a rich Panel.
    - colorful: apply styles (default True).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {"code": "error-code", "title": "error-title", "message": "error-message"})

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NamelessArgumentError(DescriptorFault): ...
class ExhaustedIdentitiesError(DescriptorFault): ...


class DescriptorWarning(Warning):
    """
    Base class for non-fatal descriptor faults; same options as DescriptorFault.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {"code": "warning-code", "title": "warning-title", "message": "warning-message"})

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            # __trigger__ -> trigger() -> descriptor method -> caller
            return warnings.warn(self, stacklevel=4)
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MixedArgumentWarning(DescriptorWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, errors
      are raised and warnings are emitted.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "DescriptorFault",
    "NamelessArgumentError",
    "ExhaustedIdentitiesError",
    "DescriptorWarning",
    "MixedArgumentWarning",
    "trigger",
    "getdoc",
)
