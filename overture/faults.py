"""
Overture faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised or recorded while looking up, resolving and running a command.
- CommandException: base type that carries a message plus keyword options and
  knows how to render itself (rich) or raise itself, depending on shell mode.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry raises UnknownCommandError on lookup misses.
- The resolver records per-overload rejections with MISSING_VALUE,
  PARSER_FAILURE or UNPARSED_TOKENS codes and, when every overload rejects,
  raises NoMatchingOverloadError carrying those records.
- The shell calls trigger(fault, shell=..., fancy=..., colorful=...): outside
  shell mode faults are raised, in shell mode they are printed via rich.

Host configuration (read from __main__ when present)
- __prog__:   label shown in fault headers (defaults to the "prog" option).
- __styles__: palette overrides, merged over the built-in one.
- __codes__:  FaultCode → label remapping.
- __docs__:   FaultCode → short documentation string.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x)
      • UNKNOWN_COMMAND, NO_MATCHING_OVERLOAD
    - overload rejections (1112x), recorded per overload and never raised alone
      • MISSING_VALUE, PARSER_FAILURE, UNPARSED_TOKENS
    - delegated errors (1113x)
      • DELEGATED_ERROR
    """
    # --- routing errors ---
    UNKNOWN_COMMAND             = 11101
    NO_MATCHING_OVERLOAD        = 11102

    # --- overload rejections ---
    MISSING_VALUE               = 11121
    PARSER_FAILURE              = 11122
    UNPARSED_TOKENS             = 11123

    # --- delegated errors ---
    DELEGATED_ERROR             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code (see __codes__).
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base fault: a lowercased, one-sentence message plus rendering options.

    Recognized options
    - title, code, hint: header and hint line.
    - prog: program label (overridden by __prog__ in __main__).
    - shell: print instead of raise when triggered.
    - fancy: wrap the rendering in a panel.
    - colorful: apply the palette.
    Anything else (input, command, mismatches, exception, ...) is payload for
    callers and reporters.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # payload options read like attributes (fault.input, fault.mismatches, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "overture")), "prog-name")
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
            " | ",
            text(str(self.options.get("title", "error")).title(), "error-title"),
            " ]"
        )
        message = text(coalesce(self.message, ""), "error-message")
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException): ...
class NoMatchingOverloadError(CommandException): ...
class DelegatedCommandError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options).
    - in shell mode, rendering happens via the rich console; otherwise the
      merged fault is raised.
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
    optional documentation fetch for a fault code from __docs__ in __main__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "NoMatchingOverloadError",
    "DelegatedCommandError",
    "FaultCode",
    "trigger",
    "getdoc",
)
