"""
ecp faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure kind the
  parser or the shell shim can surface.
- ParseError and its subclasses: the closed taxonomy (invalid input, invalid
  command, invalid flag, i/o error, unknown). Each carries a message plus
  options and knows how to render itself.
- trigger(): central entry point to surface a fault at the process boundary
  (print to stderr through rich, then exit with status 1).

Rendering contract
- str(fault) is a single line prefixed by the fixed tag "Error:", e.g.
  "Error: Invalid command: Command not found: foo".
- __rich__ adds a header (program, code, title) and a hint line; the look is
  controlled by the "colorful" and "fancy" options and by an optional
  __styles__ mapping in __main__.

Integration
- The parser raises these exceptions; it never prints nor exits.
- The shell shim (ecp.shell) calls trigger(fault, **options) on the fallible
  result when the caller asked for the convenience behavior.
"""
import sys
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
    - structure (1110x): INVALID_INPUT
    - routing (1110x): INVALID_COMMAND
    - switches (1111x): INVALID_FLAG
    - boundary (1115x): IO_ERROR
    - catch-all (1119x): UNKNOWN
    """
    INVALID_INPUT   = 11100
    INVALID_COMMAND = 11101
    INVALID_FLAG    = 11112
    IO_ERROR        = 11151
    UNKNOWN         = 11199

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base class of every fault raised while turning raw tokens into a result.

    subclasses only pin down the label shown after the "Error:" tag, the title
    used in rich headers and the fault code; the message and any context
    (input token, position, suggestions, hint) travel as options.
    """
    label = "Parse error"
    title = "parse error"
    code = FaultCode.UNKNOWN

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        if not (message := coalesce(self.message, "")):
            return "Error: %s" % self.label
        return "Error: %s: %s" % (self.label, message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", self.options.get("prog", "ecp"))

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidInputError(ParseError):
    label = "Invalid input"
    title = "invalid input"
    code = FaultCode.INVALID_INPUT


class InvalidCommandError(ParseError):
    label = "Invalid command"
    title = "invalid command"
    code = FaultCode.INVALID_COMMAND

    @property
    def input(self):
        """the offending token (command or subcommand name)."""
        return self.options.get("input")


class InvalidFlagError(ParseError):
    label = "Invalid flag"
    title = "invalid flag"
    code = FaultCode.INVALID_FLAG


class InputOutputError(ParseError):
    """
    wraps a lower-level failure of the argument-acquisition boundary.

    the wrapped exception is kept both as `error` and as __cause__ (callers
    are expected to raise it with `from`).
    """
    label = "IO error"
    title = "io error"
    code = FaultCode.IO_ERROR

    @property
    def error(self):
        return self.options.get("error")


class UnknownError(ParseError):
    label = "Unknown error"
    title = "unknown error"
    code = FaultCode.UNKNOWN


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - the built-in faults print through the rich stderr console and exit with status 1.

    typical options
    - prog, colorful, fancy, hint, input, index, suggestions.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    replaced = fault.__replace__(**options)
    replaced.__cause__ = fault.__cause__
    replaced.__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "InvalidInputError",
    "InvalidCommandError",
    "InvalidFlagError",
    "InputOutputError",
    "UnknownError",
    "trigger",
)
