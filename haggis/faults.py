"""
Haggis faults (non-fatal diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every diagnostic the
  parser can produce. Parsing never fails on argument content, so all of them
  are warnings.
- HaggisWarning: base type carrying message + options; knows how to render
  itself (rich) in a friendly, lowercased and actionable way.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token after the two skipped entries (“at third position”).
- Short titles, one-sentence bodies, a single clear hint.

Integration
- The pipeline collects faults while tokenizing, settling and binding; the
  parser surfaces them once binding is done when the configuration is not silent.
- In non-shell mode, warnings are emitted through the warnings module; in shell
  mode, they are rendered on stderr via rich.
- Host applications may define __prog__, __styles__, __codes__ and __docs__ in
  __main__ to customize the rendering.
"""
import copy
import inspect
import warnings
from abc import ABC
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

    grouping
    - shorthands (1220x)
      • AMBIGUOUS_SHORTHAND, UNRESOLVED_SHORTHAND
    - binding (1221x)
      • DISCARDED_FIELD, VALUELESS_SWITCH

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- shorthand warnings (122xx) ---
    AMBIGUOUS_SHORTHAND         = 12201
    UNRESOLVED_SHORTHAND        = 12202

    # --- binding warnings (122xx) ---
    DISCARDED_FIELD             = 12211
    VALUELESS_SWITCH            = 12212

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class HaggisWarning(ABC, Warning):
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

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

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

        prog = text(getattr(main, "__prog__", self.options.get("prog", "haggis")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", "warning").title(), styler("warning-title")),
            " ]"
        )
        message = text(self.message, styler("warning-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class AmbiguousShorthandWarning(HaggisWarning): ...
class UnresolvedShorthandWarning(HaggisWarning): ...
class DiscardedFieldWarning(HaggisWarning): ...
class ValuelessSwitchWarning(HaggisWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see HaggisWarning).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, warnings.warn is used.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, docs, and any other context
      the reporter may want to show (e.g., token/index/name).
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

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "HaggisWarning",
    "AmbiguousShorthandWarning",
    "UnresolvedShorthandWarning",
    "DiscardedFieldWarning",
    "ValuelessSwitchWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
