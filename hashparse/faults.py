"""
Hashparse faults (registration and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- TemplateError: registration-time faults, raised straight to the registering
  caller before any parsing happens.
- ParseError: parse-time faults that carry their payload (token, position and
  the expected template/count) plus render options, and know how to render
  themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a parse fault (raise, or print and
  exit when running as a shell).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every parse message includes the ordinal position
  of the offending token (“at third position”, etc.).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, rename

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping
    - registration (101xx)
      • DUPLICATE_ALIAS, UNKNOWN_PARENT
    - parsing (111xx)
      • UNRECOGNIZED_ARGUMENT, OUT_OF_CONTEXT, MISSING_VALUES
    - delegated (1113x)
      • DELEGATED_ERROR

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- registration errors (10xxx) ---
    DUPLICATE_ALIAS             = 10101
    UNKNOWN_PARENT              = 10102

    # --- parse errors (11xxx) ---
    UNRECOGNIZED_ARGUMENT       = 11101
    OUT_OF_CONTEXT              = 11102
    MISSING_VALUES              = 11111

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _payload(name, /):
    # read-only accessor over the fault's options mapping
    @rename(name)
    def getter(self):
        return self.options.get(name)
    return property(getter)


class TemplateError(ValueError):
    """
    base type for faults raised while registering templates.

    these are programming errors in the CLI definition rather than user input
    errors, so they are always raised (never printed) and carry no render options.
    """
    code = Unset

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message


class DuplicateAliasError(TemplateError):
    code = FaultCode.DUPLICATE_ALIAS

    def __init__(self, message, /, alias, identity=None):
        super().__init__(message)
        self.alias = alias
        # identity already owning the alias (None for reserved aliases)
        self.identity = identity


class UnknownParentError(TemplateError):
    code = FaultCode.UNKNOWN_PARENT

    def __init__(self, message, /, parent):
        super().__init__(message)
        self.parent = parent


class ParseError(Exception):
    """
    base type for faults raised while scanning an argument sequence.

    every parse fault is terminal to the current parse call; the options mapping
    carries the payload (token, position, ...) and the render/runtime options
    (title, code, hint, docs, prog, shell, fancy, colorful).
    """
    token = _payload("token")
    position = _payload("position")

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

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
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "hashparse"), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        renders = [text(self.message, styler("error-message"))]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("docs")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class UnrecognizedArgumentError(ParseError):
    pass


class OutOfContextError(ParseError):
    alias = _payload("alias")
    expected_parent = _payload("expected_parent")


class MissingValuesError(ParseError):
    alias = _payload("alias")
    expected = _payload("expected")
    found = _payload("found")


class DelegatedError(ParseError):
    alias = _payload("alias")
    exception = _payload("exception")


def trigger(fault, /, **options):
    """
    surface a parse fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed to stderr and the process exits with
      status 1; otherwise the fault is raised.
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
    "TemplateError",
    "DuplicateAliasError",
    "UnknownParentError",
    "ParseError",
    "UnrecognizedArgumentError",
    "OutOfContextError",
    "MissingValuesError",
    "DelegatedError",
    "trigger",
    "getdoc",
)
