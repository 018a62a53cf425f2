"""
Argconvert faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error kind raised
  by the package. Codes are grouped by domain to keep searches predictable.
- ArgumentError: base type that carries message + options and knows how to
  render itself for a terminal via rich.
- ConfigurationError / RegistrationError / AccessError / ValueAccessError /
  ArgumentParsingError / HelpStringError: the concrete kinds.
- trigger(): entry point for host programs that want to surface a fault either
  by raising it or by printing it and exiting (shell mode).

Propagation
- The library itself always raises synchronously; nothing is caught or retried
  internally. Conversion functions may raise their own exceptions (ValueError
  and friends), which are never wrapped.

Integration
- Host programs may expose __prog__, __styles__ and __codes__ in __main__ to
  customize the program name, colors and code labels used when rendering.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - build time (2110x): CONFIGURATION, REGISTRATION
    - access (2120x): ACCESS, VALUE_ACCESS
    - input (2130x): ARGUMENT_PARSING
    - presentation (2140x): HELP_STRING
    """
    # --- build time errors (21xxx) ---
    CONFIGURATION    = 21101
    REGISTRATION     = 21102

    # --- access errors (21xxx) ---
    ACCESS           = 21201
    VALUE_ACCESS     = 21202

    # --- input errors (21xxx) ---
    ARGUMENT_PARSING = 21301

    # --- presentation errors (21xxx) ---
    HELP_STRING      = 21401

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentError(Exception):
    """
    base class for all errors raised by argconvert.

    every concrete kind declares a default code, title and hint; any of them can
    be overridden per instance through keyword options. catching ArgumentError
    catches every kind raised by the package.
    """
    __code__ = Unset
    __title__ = "argument error"
    __hint__ = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
            "hint": type(self).__hint__,
        } | options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def hint(self):
        return self.options["hint"]

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

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

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "argconvert")), "prog-name")
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not Unset else "?", "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        message = text(self, "error-message")

        if not self.options["hint"]:
            body = Group(message)
        else:
            body = Group(message, Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))

        if self.options.get("fancy", False):
            return Panel(body, title=header, title_align="left")

        return Group(header, body)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ArgumentError):
    """malformed parameter configuration at build time."""
    __code__ = FaultCode.CONFIGURATION
    __title__ = "bad parameter configuration"
    __hint__ = "names and default arguments must be non-empty, bounds must be non-negative"


class RegistrationError(ArgumentError):
    """conflict while inserting a parameter into a parameter map."""
    __code__ = FaultCode.REGISTRATION
    __title__ = "parameter conflict"
    __hint__ = "every name and every position may only be used once per map"


class AccessError(ArgumentError):
    """unknown name or id, or a value requested with the wrong type."""
    __code__ = FaultCode.ACCESS
    __title__ = "unknown parameter"


class ValueAccessError(ArgumentError):
    """valid reference, but the operation does not fit the parameter's state."""
    __code__ = FaultCode.VALUE_ACCESS
    __title__ = "value not available"


class ArgumentParsingError(ArgumentError):
    """malformed command-line or configuration-file input."""
    __code__ = FaultCode.ARGUMENT_PARSING
    __title__ = "invalid input"


class HelpStringError(ArgumentError):
    """invalid help-string layout settings."""
    __code__ = FaultCode.HELP_STRING
    __title__ = "bad help layout"
    __hint__ = "width must be positive and larger than both indentations"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is rendered on stderr through rich and the process
      exits with status 1 (unless deferred); otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, deferred, prog, hint, and any other context the
      reporter may want to keep on the fault.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentError",
    "ConfigurationError",
    "RegistrationError",
    "AccessError",
    "ValueAccessError",
    "ArgumentParsingError",
    "HelpStringError",
    "trigger",
)
