"""
Argline faults (parse-time errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- ArglineException: base type carrying a message plus read-only options; knows
  how to render itself (rich), how to clone itself with merged options
  (copy.replace) and how to surface itself (__trigger__).
- trigger(): central entry point to surface any fault.

Modes
- Library mode (shell=False, the default): faults are raised as exceptions so the
  caller decides what to do.
- Shell mode (shell=True): faults are printed to stderr and the process exits
  with status 1. Only the CLI shell (argline.commands) enables this mode.

Declaration-time problems (bad arity literals, duplicate names) are programmer
errors and are raised as plain TypeError/ValueError by the specs and the
registry; they never go through this module.

Host customization
- __codes__ in __main__: mapping FaultCode -> label, used by FaultCode.normalize().
- __styles__ in __main__: palette overrides for the rich rendering.
- __prog__ in __main__: program label shown in fault headers.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - arity (111xx)
      • INSUFFICIENT_ARGUMENTS: a fixed arity cannot obtain its tokens.
    - internal (119xx)
      • INCONSISTENT_REGISTRY: a declared option cannot be looked up again.
    """
    # --- arity errors (11xxx) ---
    INSUFFICIENT_ARGUMENTS = 11122

    # --- internal errors (11xxx) ---
    INCONSISTENT_REGISTRY = 11191

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArglineException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    @property
    def code(self):
        return self.options.get("code")

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

        colorful = self.options.get("colorful", False)
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

        registry = self.options.get("registry")
        prog = text(getattr(main, "__prog__", getattr(registry, "name", None) or "error"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        Console(stderr=True).print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InsufficientArgumentsError(ArglineException): ...
class InconsistentRegistryError(ArglineException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArglineException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via a stderr rich console and the process
      exits with status 1; otherwise the fault is raised.
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
    "ArglineException",
    "InsufficientArgumentsError",
    "InconsistentRegistryError",
    "trigger",
)
