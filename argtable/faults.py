"""
argtable faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- ArgumentError: terminal parse failures. Two kinds exist:
  • UnrecognizedArgumentError: a token names no declaration.
  • AcceptanceError: a valued option's converter rejected its value.
- ArgumentWarning: non-fatal issues (e.g., duplicated option names).
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: "unrecognized argument '--x' at second position".
- Short titles, one-sentence bodies, a single clear hint.

Integration
- The engine raises faults directly; the Parser surfaces them through
  trigger(fault, **options). Outside shell mode errors are raised and warnings
  go through the warnings module; in shell mode they are rendered via rich.
"""
import copy
import inspect
import os.path
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
    canonical fault codes (stable identifiers).

    ranges
    - 11xxx: errors (terminal)
    - 12xxx: warnings (informational)

    normalize() lets the host remap codes to custom labels.
    """
    # --- errors ---
    UNRECOGNIZED_ARGUMENT = 11112
    ACCEPTANCE_ERROR      = 11131

    # --- warnings ---
    DUPLICATED_NAME       = 12115

    def normalize(self):
        """
        return a host-normalized string for this code.

        a __codes__ mapping in __main__ overrides numeric ids with friendlier
        labels; otherwise the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    """Program name for headers: the table's prog, __main__.__prog__, or argv[0]."""
    if (prog := getattr(options.get("table"), "prog", None)) is not None:
        return prog
    if (prog := getattr(__import__("__main__"), "__prog__", Unset)) is not Unset:
        return prog
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argtable"


class _Renderable:
    """
    Rich rendering shared by errors and warnings.

    Subclasses define __palette__ (the default styles) and __kind__ (the
    palette prefix used for the title and message).
    """
    __palette__ = {}
    __kind__ = ""

    def __rich__(self):
        main = __import__("__main__")
        options = self.options

        styles = defaultdict(str, type(self).__palette__ | getattr(main, "__styles__", {}))
        colorful = options.get("colorful", True)
        fancy = options.get("fancy", False)

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

        code = options.get("code")
        header = Text.assemble(
            "[ ",
            text(_prog(options), styler("prog-name")),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
            " | ",
            text(str(options.get("title", type(self).__kind__)).title(), styler(type(self).__kind__ + "-title")),
            " ]"
        )
        message = text(self.message, styler(type(self).__kind__ + "-message"))
        renders = [message]
        if hint := options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArgumentError(_Renderable, Exception):
    """
    Base class of the terminal parse failures.

    Carries a message and a read-only mapping of options (code, title, hint,
    input, index, runtime flags...). Parsing stops at the first one.
    """
    __kind__ = "error"
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "error-title": "bold #FF4DA6",  # pinky title

        # body
        "error-message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # green arrow
        "hint": "italic #9CE19C",  # green hint text
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)


class UnrecognizedArgumentError(ArgumentError):
    """No declaration's long or short name equals the token."""

    @property
    def token(self):
        return self.options.get("input", "")


class AcceptanceError(ArgumentError):
    """A valued option's converter rejected the supplied value."""

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **options)
        self.__cause__ = options.get("exception")

    @property
    def error(self):
        return self.options.get("exception")


class ArgumentWarning(_Renderable, Warning):
    """Base class of the non-fatal faults."""
    __kind__ = "warning"
    __palette__ = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #FFB400",  # amber fault code
        "warning-title": "bold #FFC2E0",  # softer pinky title

        # body
        "warning-message": "#D6D6DE",  # slightly lighter gray body
        "hint-arrow": "#B8EFAF dim",  # softer green arrow
        "hint": "italic #B8EFAF",  # softer green hint text
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class DuplicateNameWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via copy.replace() before triggering.
    - outside shell mode errors are raised and warnings are emitted; in shell
      mode both are rendered through the rich console (errors then exit).
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

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; when the code is missing, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentError",
    "UnrecognizedArgumentError",
    "AcceptanceError",
    "ArgumentWarning",
    "DuplicateNameWarning",
    "trigger",
    "getdoc",
)
